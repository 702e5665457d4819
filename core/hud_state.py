"""
Owned state container for the dashboard.

Holds the six display slots. Each slot has exactly one writer, which claims
it once and receives a ``SlotWriter``; everybody else reads through the
container's read-only properties or a snapshot.
"""
import logging
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List

from .data_models import (
    BatteryStatus,
    ClockReading,
    HeadlineSet,
    HudSnapshot,
    PlaybackState,
    SearchSession,
    WeatherReading,
)
from .errors import SlotOwnershipError

logger = logging.getLogger(__name__)


class Slot(Enum):
    CLOCK = "clock"
    BATTERY = "battery"
    WEATHER = "weather"
    HEADLINES = "headlines"
    SEARCH = "search"
    PLAYBACK = "playback"


# Type alias for slot change callbacks
SlotCallback = Callable[[Slot], None]


class SlotWriter:
    """Write handle for a single slot, held by its owning component."""

    def __init__(self, state: "HudState", slot: Slot, owner: str) -> None:
        self._state = state
        self.slot = slot
        self.owner = owner

    def get(self) -> Any:
        return self._state.read(self.slot)

    def set(self, value: Any) -> None:
        self._state._commit(self.slot, value)

    def __repr__(self) -> str:
        return f"SlotWriter(slot={self.slot.value}, owner={self.owner})"


class HudState:
    """
    State container with single-writer-per-slot discipline.

    Change callbacks receive the slot that changed. A failing callback is
    logged and does not stop the others.
    """

    def __init__(self) -> None:
        self._values: Dict[Slot, Any] = {
            Slot.CLOCK: ClockReading(datetime.now()),
            Slot.BATTERY: BatteryStatus(),
            Slot.WEATHER: WeatherReading(),
            Slot.HEADLINES: (),
            Slot.SEARCH: SearchSession(),
            Slot.PLAYBACK: PlaybackState(),
        }
        self._owners: Dict[Slot, str] = {}
        self._callbacks: List[SlotCallback] = []

    def claim(self, slot: Slot, owner: str) -> SlotWriter:
        """
        Claim write access to a slot.

        Args:
            slot: Slot to claim
            owner: Name of the claiming component

        Returns:
            Writer bound to the slot

        Raises:
            SlotOwnershipError: If another component already owns the slot
        """
        current = self._owners.get(slot)
        if current is not None and current != owner:
            raise SlotOwnershipError(
                f"slot '{slot.value}' is owned by {current}, not {owner}"
            )
        self._owners[slot] = owner
        return SlotWriter(self, slot, owner)

    def owner_of(self, slot: Slot) -> str | None:
        return self._owners.get(slot)

    def register_callback(self, callback: SlotCallback) -> None:
        if callback not in self._callbacks:
            self._callbacks.append(callback)

    def unregister_callback(self, callback: SlotCallback) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def read(self, slot: Slot) -> Any:
        return self._values[slot]

    def _commit(self, slot: Slot, value: Any) -> None:
        self._values[slot] = value
        for callback in list(self._callbacks):
            try:
                callback(slot)
            except Exception as exc:
                logger.error("State callback error for %s: %s", slot.value, exc)

    # ------------------------------------------------------------------
    @property
    def clock(self) -> ClockReading:
        return self._values[Slot.CLOCK]

    @property
    def battery(self) -> BatteryStatus:
        return self._values[Slot.BATTERY]

    @property
    def weather(self) -> WeatherReading:
        return self._values[Slot.WEATHER]

    @property
    def headlines(self) -> HeadlineSet:
        return self._values[Slot.HEADLINES]

    @property
    def search(self) -> SearchSession:
        return self._values[Slot.SEARCH]

    @property
    def playback(self) -> PlaybackState:
        return self._values[Slot.PLAYBACK]

    def snapshot(self) -> HudSnapshot:
        return HudSnapshot(
            clock=self.clock,
            battery=self.battery,
            weather=self.weather,
            headlines=self.headlines,
            search=self.search,
            playback=self.playback,
        )
