"""Playback Simulator: synthetic track progress while "playing"."""
import logging
from dataclasses import replace
from typing import Optional, Sequence

from .data_models import PlaybackState, Track
from .hud_state import HudState, Slot
from .playlist import PLAYLIST
from .timers import RecurringTimer, SleepFunc

logger = logging.getLogger(__name__)

PROGRESS_STEPS = 100


class PlaybackSimulator:
    """
    Sole writer of the playback slot.

    The progress timer exists only while playing; pausing cancels it.
    """

    def __init__(
        self,
        state: HudState,
        playlist: Sequence[Track] = PLAYLIST,
        *,
        interval: float = 1.0,
        sleep: Optional[SleepFunc] = None,
    ) -> None:
        if not playlist:
            raise ValueError("playlist must not be empty")
        self._playback = state.claim(Slot.PLAYBACK, "playback_simulator")
        self.playlist = tuple(playlist)
        self._timer = RecurringTimer(interval, self.tick, name="playback", sleep=sleep)

    @property
    def state(self) -> PlaybackState:
        return self._playback.get()

    @property
    def current_track(self) -> Track:
        return self.playlist[self.state.track_index]

    @property
    def timer_active(self) -> bool:
        return self._timer.is_active

    def toggle_play(self) -> PlaybackState:
        return self._apply(replace(self.state, is_playing=not self.state.is_playing))

    def next_track(self) -> PlaybackState:
        index = (self.state.track_index + 1) % len(self.playlist)
        logger.info("Next track: %s", self.playlist[index].title)
        # Skipping also starts playback.
        return self._apply(PlaybackState(track_index=index, is_playing=True, progress=0))

    def tick(self) -> None:
        current = self.state
        self._playback.set(replace(current, progress=(current.progress + 1) % PROGRESS_STEPS))

    def activate(self) -> None:
        """Resume the progress timer if the state says we are playing."""
        if self.state.is_playing:
            self._timer.start()

    def deactivate(self) -> None:
        """Cancel the progress timer, leaving the playback state as is."""
        self._timer.stop()

    def _apply(self, new_state: PlaybackState) -> PlaybackState:
        self._playback.set(new_state)
        if new_state.is_playing:
            self._timer.start()
        else:
            self._timer.stop()
        logger.debug("Playback: %s", new_state)
        return new_state
