import asyncio
import logging
import threading
from typing import Optional

from PySide6.QtCore import QObject, Property, Signal, Slot

from config.desktop import DesktopConfiguration
from core.factories import make_coordinator
from core.hud_coordinator import HudCoordinator
from core.hud_state import Slot as StateSlot
from core.ui_logic.formatting import (
    format_battery,
    format_date,
    format_progress,
    format_temperature,
    format_time,
)
from .qt_models.feed_model import FeedModel

logger = logging.getLogger(__name__)

# Configure default console logging if not already configured
if not logging.getLogger().hasHandlers():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )


class DesktopCoordinator(QObject):
    """
    Bridges the asyncio HUD core and the Qt event loop.

    The core runs on a private event loop in a daemon thread. State changes
    arrive on that thread and are re-emitted as Qt signals; list models are
    only touched from the Qt thread through the queued ``_feedDirty`` signal.
    """

    # Qt signals for property changes
    clockChanged = Signal()
    batteryChanged = Signal()
    weatherChanged = Signal()
    feedChanged = Signal()
    playbackChanged = Signal()
    _feedDirty = Signal()

    def __init__(self, config: DesktopConfiguration, coordinator: Optional[HudCoordinator] = None):
        super().__init__()
        self.config = config
        self.feed_model = FeedModel()
        self.citation_model = FeedModel()
        self._feed_mode = ""
        self._feed_header = ""

        self._loop = asyncio.new_event_loop()
        self._loop_thread = threading.Thread(target=self._loop.run_forever, daemon=True)
        self._loop_thread.start()

        logger.info("Creating DesktopCoordinator instance")
        self.coordinator = coordinator or make_coordinator(config)
        self.coordinator.add_listener(self._on_state_change)
        self._feedDirty.connect(self._refresh_feed)
        self._refresh_feed()

        asyncio.run_coroutine_threadsafe(self.coordinator.start(), self._loop).result()
        logger.info("HUD core running")

    def _on_state_change(self, slot: StateSlot) -> None:
        """Runs on the core's loop thread."""
        if slot is StateSlot.CLOCK:
            self.clockChanged.emit()
        elif slot is StateSlot.BATTERY:
            self.batteryChanged.emit()
        elif slot is StateSlot.WEATHER:
            self.weatherChanged.emit()
        elif slot is StateSlot.PLAYBACK:
            self.playbackChanged.emit()
        elif slot in (StateSlot.SEARCH, StateSlot.HEADLINES):
            self._feedDirty.emit()

    def _refresh_feed(self) -> None:
        view = self.coordinator.feed_view()
        self._feed_mode = view.mode.value
        self._feed_header = view.header
        self.feed_model.set_rows([(line, "") for line in view.lines])
        self.citation_model.set_rows([(c.title, c.uri) for c in view.citations])
        logger.debug("Feed view -> %s (%d lines)", view.mode.value, len(view.lines))
        self.feedChanged.emit()

    # Qt Properties for QML binding
    @Property(str, notify=clockChanged)
    def timeText(self) -> str:
        return format_time(self.coordinator.state.clock.timestamp)

    @Property(str, notify=clockChanged)
    def dateText(self) -> str:
        return format_date(self.coordinator.state.clock.timestamp)

    @Property(str, notify=batteryChanged)
    def batteryText(self) -> str:
        return format_battery(self.coordinator.state.battery)

    @Property(bool, notify=batteryChanged)
    def batteryCharging(self) -> bool:
        return self.coordinator.state.battery.charging

    @Property(str, notify=weatherChanged)
    def weatherTemperature(self) -> str:
        return format_temperature(self.coordinator.state.weather.temperature)

    @Property(str, notify=weatherChanged)
    def weatherCondition(self) -> str:
        return self.coordinator.state.weather.condition

    @Property(str, notify=weatherChanged)
    def weatherLocation(self) -> str:
        return self.coordinator.state.weather.location

    @Property(str, notify=feedChanged)
    def feedMode(self) -> str:
        """querying, search_result, headlines or loading"""
        return self._feed_mode

    @Property(str, notify=feedChanged)
    def feedHeader(self) -> str:
        return self._feed_header

    @Property(QObject, constant=True)
    def feedLines(self) -> QObject:
        return self.feed_model

    @Property(QObject, constant=True)
    def citations(self) -> QObject:
        return self.citation_model

    @Property(bool, notify=playbackChanged)
    def isPlaying(self) -> bool:
        return self.coordinator.state.playback.is_playing

    @Property(str, notify=playbackChanged)
    def trackTitle(self) -> str:
        return self.coordinator.current_track.title

    @Property(str, notify=playbackChanged)
    def trackArtist(self) -> str:
        return self.coordinator.current_track.artist

    @Property(str, notify=playbackChanged)
    def trackDuration(self) -> str:
        return self.coordinator.current_track.duration

    @Property(int, notify=playbackChanged)
    def trackProgress(self) -> int:
        return self.coordinator.state.playback.progress

    @Property(str, notify=playbackChanged)
    def formattedPosition(self) -> str:
        return format_progress(self.coordinator.state.playback.progress)

    # ------------------------------------------------------------------
    # Action slots. Everything touching the core hops onto its loop.
    # ------------------------------------------------------------------
    @Slot(str)
    def submitSearch(self, query: str) -> None:
        if not query.strip():
            return
        logger.info("Search requested")
        self._loop.call_soon_threadsafe(self.coordinator.submit_search, query)

    @Slot()
    def goHome(self) -> None:
        self._loop.call_soon_threadsafe(self.coordinator.go_home)

    @Slot()
    def rescanWeather(self) -> None:
        logger.info("Weather rescan requested")
        self._loop.call_soon_threadsafe(self.coordinator.rescan_weather)

    @Slot()
    def refreshNews(self) -> None:
        self._loop.call_soon_threadsafe(self.coordinator.refresh_news)

    @Slot()
    def togglePlay(self) -> None:
        self._loop.call_soon_threadsafe(self.coordinator.toggle_play)

    @Slot()
    def nextTrack(self) -> None:
        self._loop.call_soon_threadsafe(self.coordinator.next_track)

    def cleanup(self) -> None:
        """Clean shutdown of the core and its loop thread"""
        logger.info("Cleaning up DesktopCoordinator")
        self.coordinator.remove_listener(self._on_state_change)
        asyncio.run_coroutine_threadsafe(self.coordinator.stop(), self._loop).result()
        self._loop.call_soon_threadsafe(self._loop.stop)
        self._loop_thread.join()
        logger.info("Coordinator cleaned up")
