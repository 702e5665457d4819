import pytest

from core.data_models import PlaybackState
from core.hud_state import HudState, Slot
from core.playback import PlaybackSimulator
from core.playlist import PLAYLIST


def make_simulator(clock):
    state = HudState()
    return state, PlaybackSimulator(state, sleep=clock.sleep)


@pytest.mark.asyncio
async def test_progress_wraps_at_one_hundred(clock):
    state, simulator = make_simulator(clock)
    simulator.toggle_play()
    # Put the track near its end, as if it had been playing a while.
    state.claim(Slot.PLAYBACK, "playback_simulator").set(
        PlaybackState(track_index=0, is_playing=True, progress=98)
    )

    await clock.advance(1)
    assert state.playback.progress == 99

    await clock.advance(1)
    assert state.playback.progress == 0
    simulator.deactivate()


@pytest.mark.asyncio
async def test_pause_cancels_timer(clock):
    state, simulator = make_simulator(clock)
    simulator.toggle_play()
    await clock.advance(3)
    assert state.playback.progress == 3

    simulator.toggle_play()
    await clock.advance(10)

    assert state.playback.progress == 3
    assert not state.playback.is_playing
    assert clock.live_sleepers == 0


@pytest.mark.asyncio
async def test_repeated_toggles_do_not_accumulate_timers(clock):
    state, simulator = make_simulator(clock)
    for _ in range(7):
        simulator.toggle_play()

    assert state.playback.is_playing
    await clock.advance(4)

    assert state.playback.progress == 4
    assert clock.live_sleepers == 1
    simulator.deactivate()


@pytest.mark.asyncio
async def test_next_track_resets_progress_and_starts_playing(clock):
    state, simulator = make_simulator(clock)
    simulator.toggle_play()
    await clock.advance(5)
    simulator.toggle_play()

    simulator.next_track()

    assert state.playback == PlaybackState(track_index=1, is_playing=True, progress=0)
    assert simulator.timer_active
    await clock.advance(1)
    assert state.playback.progress == 1
    simulator.deactivate()


@pytest.mark.asyncio
async def test_next_track_wraps_playlist(clock):
    state, simulator = make_simulator(clock)
    for _ in range(len(PLAYLIST)):
        simulator.next_track()

    assert state.playback.track_index == 0
    assert simulator.current_track == PLAYLIST[0]
    simulator.deactivate()


@pytest.mark.asyncio
async def test_deactivate_keeps_state_and_activate_resumes(clock):
    state, simulator = make_simulator(clock)
    simulator.toggle_play()
    await clock.advance(2)

    simulator.deactivate()
    await clock.advance(5)
    assert state.playback.progress == 2
    assert state.playback.is_playing
    assert clock.live_sleepers == 0

    simulator.activate()
    await clock.advance(1)
    assert state.playback.progress == 3
    simulator.deactivate()
