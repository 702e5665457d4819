"""Clock Ticker: replaces the clock slot with ``now()`` once per second."""
import logging
from datetime import datetime
from typing import Callable, Optional

from .data_models import ClockReading
from .hud_state import HudState, Slot
from .timers import RecurringTimer, SleepFunc

logger = logging.getLogger(__name__)


class ClockTicker:

    def __init__(
        self,
        state: HudState,
        *,
        now: Callable[[], datetime] = datetime.now,
        interval: float = 1.0,
        sleep: Optional[SleepFunc] = None,
    ) -> None:
        self._clock = state.claim(Slot.CLOCK, "clock_ticker")
        self._now = now
        self._timer = RecurringTimer(interval, self.tick, name="clock", sleep=sleep)

    @property
    def is_active(self) -> bool:
        return self._timer.is_active

    def activate(self) -> None:
        if self._timer.start():
            self.tick()

    def deactivate(self) -> None:
        self._timer.stop()

    def tick(self) -> None:
        self._clock.set(ClockReading(self._now()))
