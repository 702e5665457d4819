"""
HUD coordinator.

Owns the shared HudState and every component that writes to it. Background
requests spawned by startup and user actions are tracked so stop() can cancel
them.
"""
import asyncio
import logging
from datetime import datetime
from typing import Callable, Coroutine, List, Optional, Set

from .api_client import AnswerEngineClient
from .clock_ticker import ClockTicker
from .data_models import HudSnapshot, PlaybackState, Track
from .device_bridge import DeviceSensorBridge
from .hud_state import HudState, Slot
from .news_loader import NewsFeedLoader
from .playback import PlaybackSimulator
from .search_orchestrator import SearchOrchestrator
from .sensors import BatterySensor, LocationSensor
from .timers import SleepFunc
from .ui_logic.feed_display import FeedView, select_feed_view
from .weather_resolver import WeatherResolver

logger = logging.getLogger(__name__)


class HudCoordinator:
    """Binds every data source to one HudState and owns their lifecycles."""

    def __init__(
        self,
        engine: AnswerEngineClient,
        *,
        battery_sensor: Optional[BatterySensor] = None,
        location_sensor: Optional[LocationSensor] = None,
        now: Callable[[], datetime] = datetime.now,
        tick_interval: float = 1.0,
        sleep: Optional[SleepFunc] = None,
    ) -> None:
        self.engine = engine
        self.state = HudState()
        self.clock = ClockTicker(self.state, now=now, interval=tick_interval, sleep=sleep)
        self.sensors = DeviceSensorBridge(self.state, battery_sensor, location_sensor)
        self.weather = WeatherResolver(self.state, self.sensors, engine)
        self.news = NewsFeedLoader(self.state, engine)
        self.search = SearchOrchestrator(self.state, engine)
        self.playback = PlaybackSimulator(self.state, interval=tick_interval, sleep=sleep)

        self._callbacks: List[Callable[[Slot], None]] = []
        self._tasks: Set[asyncio.Task] = set()
        self._running = False
        self.state.register_callback(self._notify_listeners)

    @property
    def running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Activate timers and sensors and kick off the startup loads."""
        if self._running:
            return
        self._running = True
        self.clock.activate()
        self.sensors.activate()
        self.playback.activate()
        self._spawn(self.news.load(), "news-load")
        self._spawn(self.weather.resolve(), "weather-resolve")
        logger.info("HUD coordinator started")

    async def stop(self) -> None:
        """Deactivate every timer and sensor and cancel outstanding requests."""
        if not self._running:
            return
        self._running = False
        self.clock.deactivate()
        self.playback.deactivate()
        self.sensors.deactivate()

        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks.clear()
        await asyncio.to_thread(self.engine.close)
        logger.info("HUD coordinator stopped")

    # ------------------------------------------------------------------
    def add_listener(self, callback: Callable[[Slot], None]) -> None:
        if callback not in self._callbacks:
            self._callbacks.append(callback)

    def remove_listener(self, callback: Callable[[Slot], None]) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def _notify_listeners(self, slot: Slot) -> None:
        for callback in list(self._callbacks):
            try:
                callback(slot)
            except Exception as exc:  # pragma: no cover - best effort
                logger.error("Listener error: %s", exc)

    # ------------------------------------------------------------------
    def _spawn(self, coro: Coroutine, name: str) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Background task %s failed: %s", task.get_name(), exc)

    @property
    def pending_tasks(self) -> int:
        return len(self._tasks)

    # ------------------------------------------------------------------
    # User actions. Network-bound ones return the spawned task so callers
    # can await it, but never have to.
    # ------------------------------------------------------------------
    def rescan_weather(self) -> asyncio.Task:
        return self._spawn(self.weather.resolve(), "weather-rescan")

    def refresh_news(self) -> asyncio.Task:
        return self._spawn(self.news.refresh(), "news-refresh")

    def submit_search(self, query: str) -> Optional[asyncio.Task]:
        if not (query or "").strip():
            return None
        return self._spawn(self.search.submit(query), "search")

    def go_home(self) -> None:
        self.search.clear()

    def toggle_play(self) -> PlaybackState:
        return self.playback.toggle_play()

    def next_track(self) -> PlaybackState:
        return self.playback.next_track()

    # ------------------------------------------------------------------
    def snapshot(self) -> HudSnapshot:
        return self.state.snapshot()

    def feed_view(self) -> FeedView:
        return select_feed_view(self.state.search, self.state.headlines)

    @property
    def current_track(self) -> Track:
        return self.playback.current_track
