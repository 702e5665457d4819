"""Core data structures for the HUD application.

Contains the immutable records stored in the HUD state slots. Every slot is
replaced wholesale on update; nothing here is mutated in place.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple


@dataclass(frozen=True, slots=True)
class ClockReading:
    """Instantaneous wall-clock snapshot."""
    timestamp: datetime


@dataclass(frozen=True, slots=True)
class BatteryStatus:
    """Battery level (0-100) and charging flag.

    The default is optimistic: full and charging, until the first sensor event.
    """
    level: float = 100.0
    charging: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "level", min(100.0, max(0.0, float(self.level))))


@dataclass(frozen=True, slots=True)
class Coordinates:
    latitude: float
    longitude: float


class WeatherStatus(Enum):
    """Terminal states of a weather reading."""
    SCANNING = "scanning"
    RESOLVED = "resolved"
    DEGRADED = "degraded"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class WeatherReading:
    """Weather as free text, exactly as the Answer Engine phrased it."""
    temperature: str = "--"
    condition: str = "SCANNING..."
    location: str = "UNKNOWN SECTOR"
    status: WeatherStatus = WeatherStatus.SCANNING


@dataclass(frozen=True, slots=True)
class Citation:
    """A source link attached to a grounded answer."""
    title: str
    uri: str


@dataclass(frozen=True, slots=True)
class EngineAnswer:
    """Text returned by the Answer Engine plus any grounding citations."""
    text: str
    citations: Tuple[Citation, ...] = ()


@dataclass(frozen=True, slots=True)
class SearchSession:
    """The single live search.

    ``result_text is None`` means there is no active search and the feed pane
    falls back to headlines.
    """
    query: str = ""
    result_text: Optional[str] = None
    citations: Tuple[Citation, ...] = ()
    pending: bool = False

    @property
    def is_idle(self) -> bool:
        return not self.pending and self.result_text is None


@dataclass(frozen=True, slots=True)
class Track:
    title: str
    artist: str
    duration: str


@dataclass(frozen=True, slots=True)
class PlaybackState:
    """Simulated player state; progress always stays within [0, 99]."""
    track_index: int = 0
    is_playing: bool = False
    progress: int = 0


# Headlines are an ordered tuple of at most three strings; empty = not loaded.
HeadlineSet = Tuple[str, ...]


@dataclass(frozen=True)
class HudSnapshot:
    """Read-only view of every slot at one instant."""
    clock: ClockReading
    battery: BatteryStatus
    weather: WeatherReading
    headlines: HeadlineSet = field(default_factory=tuple)
    search: SearchSession = field(default_factory=SearchSession)
    playback: PlaybackState = field(default_factory=PlaybackState)
