"""Shared fakes: simulated clock, scripted Answer Engine, scripted sensors."""
import asyncio
from collections import deque
from typing import Any, Deque, List, Optional, Tuple

import pytest

from core.data_models import BatteryStatus, Coordinates, EngineAnswer
from core.errors import SensorUnavailable
from core.sensors import BatterySensor, LocationSensor, Subscription


async def settle(rounds: int = 10) -> None:
    """Let ready tasks run without advancing simulated time."""
    for _ in range(rounds):
        await asyncio.sleep(0)


class FakeClock:
    """Simulated time. Pass ``clock.sleep`` to timers, drive with ``advance``."""

    def __init__(self) -> None:
        self.now = 0.0
        self._seq = 0
        self._sleepers: List[Tuple[float, int, asyncio.Future]] = []

    async def sleep(self, delay: float) -> None:
        future = asyncio.get_running_loop().create_future()
        self._seq += 1
        self._sleepers.append((self.now + delay, self._seq, future))
        await future

    @property
    def live_sleepers(self) -> int:
        return sum(1 for _, _, future in self._sleepers if not future.done())

    async def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            await settle()
            self._sleepers = [s for s in self._sleepers if not s[2].done()]
            due = [s for s in self._sleepers if s[0] <= target + 1e-9]
            if not due:
                break
            entry = min(due, key=lambda s: (s[0], s[1]))
            self._sleepers.remove(entry)
            self.now = max(self.now, entry[0])
            entry[2].set_result(None)
        self.now = target
        await settle()


class FakeEngine:
    """
    Scripted Answer Engine.

    Queued results are consumed in call order. A result may be a string, an
    EngineAnswer, an exception instance, or a future resolving to either.
    """

    def __init__(self, default: Any = "") -> None:
        self.default = default
        self.calls: List[Tuple[str, bool]] = []
        self.closed = False
        self._results: Deque[Any] = deque()

    def queue(self, *results: Any) -> None:
        self._results.extend(results)

    async def ask(self, prompt: str, grounding_enabled: bool = False) -> EngineAnswer:
        self.calls.append((prompt, grounding_enabled))
        result = self._results.popleft() if self._results else self.default
        if isinstance(result, asyncio.Future):
            result = await result
        if isinstance(result, BaseException):
            raise result
        if isinstance(result, str):
            return EngineAnswer(text=result)
        return result

    def close(self) -> None:
        self.closed = True


class FakeLocationSensor(LocationSensor):
    def __init__(self, result: Any = Coordinates(35.68, 139.69)) -> None:
        self.result = result
        self.calls = 0

    async def get_position(self) -> Coordinates:
        self.calls += 1
        if isinstance(self.result, BaseException):
            raise self.result
        return self.result


class FakeSubscription(Subscription):
    def __init__(self) -> None:
        self.closed = False

    def close(self) -> None:
        self.closed = True


class FakeBatterySensor(BatterySensor):
    """Battery whose events are pushed by the test via ``emit``."""

    def __init__(self, available: bool = True) -> None:
        self.available = available
        self.callback = None
        self.subscription: Optional[FakeSubscription] = None

    def observe(self, callback):
        if not self.available:
            raise SensorUnavailable("no battery in this test")
        self.callback = callback
        self.subscription = FakeSubscription()
        return self.subscription

    def emit(self, level: float, charging: bool) -> None:
        self.callback(BatteryStatus(level=level, charging=charging))


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine()
