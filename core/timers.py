"""
Recurring timer bound to an activation scope.

Every timer-bearing component (clock, playback, polling) goes through
``RecurringTimer`` so that a schedule is established at most once per
activation and is always cancelled on deactivation. The sleep function is
injectable so tests can drive simulated time.
"""
import asyncio
import logging
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]
TickCallback = Callable[[], None]


class RecurringTimer:
    """
    Fires ``callback`` every ``interval`` seconds on the running event loop.

    Missed ticks are not buffered: each firing happens one interval after the
    previous callback returned. A callback failure is logged and the schedule
    keeps running until ``stop()``.
    """

    def __init__(
        self,
        interval: float,
        callback: TickCallback,
        *,
        name: str = "timer",
        sleep: Optional[SleepFunc] = None,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.interval = interval
        self.callback = callback
        self.name = name
        self._sleep: SleepFunc = sleep or asyncio.sleep
        self._task: Optional[asyncio.Task] = None

    @property
    def is_active(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> bool:
        """
        Establish the schedule.

        Returns:
            True if a new schedule was created, False if one was already live
        """
        if self.is_active:
            return False
        self._task = asyncio.get_running_loop().create_task(self._run(), name=self.name)
        logger.debug("Timer %s started (%.2fs)", self.name, self.interval)
        return True

    def stop(self) -> None:
        """Cancel the schedule; safe to call when already stopped."""
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
            logger.debug("Timer %s stopped", self.name)

    async def aclose(self) -> None:
        """Cancel the schedule and wait until the task has unwound."""
        task = self._task
        self.stop()
        if task is not None:
            try:
                await task
            except asyncio.CancelledError:
                pass

    async def _run(self) -> None:
        try:
            while True:
                await self._sleep(self.interval)
                try:
                    self.callback()
                except Exception as exc:
                    logger.error("Timer %s callback error: %s", self.name, exc)
        finally:
            if self._task is asyncio.current_task():
                self._task = None

    def __enter__(self) -> "RecurringTimer":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
