import asyncio

import pytest

from core.timers import RecurringTimer


@pytest.mark.asyncio
async def test_timer_fires_once_per_interval(clock):
    ticks = []
    timer = RecurringTimer(1.0, lambda: ticks.append(clock.now), sleep=clock.sleep)
    timer.start()

    await clock.advance(3)

    assert ticks == [1.0, 2.0, 3.0]
    timer.stop()


@pytest.mark.asyncio
async def test_stop_leaves_no_live_callbacks(clock):
    ticks = []
    timer = RecurringTimer(1.0, lambda: ticks.append(1), sleep=clock.sleep)
    timer.start()
    await clock.advance(2)

    timer.stop()
    await clock.advance(5)

    assert len(ticks) == 2
    assert clock.live_sleepers == 0
    assert not timer.is_active


@pytest.mark.asyncio
async def test_start_is_idempotent_while_active(clock):
    ticks = []
    timer = RecurringTimer(1.0, lambda: ticks.append(1), sleep=clock.sleep)

    assert timer.start() is True
    assert timer.start() is False
    await clock.advance(3)

    # A duplicate schedule would have doubled the tick rate.
    assert len(ticks) == 3
    assert clock.live_sleepers == 1
    timer.stop()


@pytest.mark.asyncio
async def test_callback_failure_is_contained_and_stop_still_cancels(clock):
    calls = []

    def flaky():
        calls.append(1)
        if len(calls) == 1:
            raise RuntimeError("boom")

    timer = RecurringTimer(1.0, flaky, sleep=clock.sleep)
    timer.start()
    await clock.advance(3)
    assert len(calls) == 3

    timer.stop()
    await clock.advance(3)
    assert len(calls) == 3
    assert clock.live_sleepers == 0


@pytest.mark.asyncio
async def test_context_manager_releases_schedule(clock):
    ticks = []
    with RecurringTimer(1.0, lambda: ticks.append(1), sleep=clock.sleep) as timer:
        await clock.advance(1)
        assert timer.is_active

    await clock.advance(3)
    assert ticks == [1]
    assert clock.live_sleepers == 0


@pytest.mark.asyncio
async def test_restart_after_stop_creates_single_schedule(clock):
    ticks = []
    timer = RecurringTimer(1.0, lambda: ticks.append(1), sleep=clock.sleep)
    for _ in range(5):
        timer.start()
        timer.stop()
    timer.start()

    await clock.advance(2)

    assert len(ticks) == 2
    assert clock.live_sleepers == 1
    await timer.aclose()
    assert clock.live_sleepers == 0


@pytest.mark.asyncio
async def test_real_sleep_default():
    fired = asyncio.Event()
    timer = RecurringTimer(0.01, fired.set)
    timer.start()
    await asyncio.wait_for(fired.wait(), timeout=1.0)
    await timer.aclose()
    assert not timer.is_active


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        RecurringTimer(0, lambda: None)
