"""Static playlist for the simulated media player."""
from typing import Tuple

from .data_models import Track

PLAYLIST: Tuple[Track, ...] = (
    Track(title="Night City Dreams", artist="Artemis Prime", duration="03:45"),
    Track(title="Neon Rain", artist="Synth Walker", duration="04:20"),
    Track(title="Cyber Heart", artist="Data Ghost", duration="02:55"),
    Track(title="Mainframe Breach", artist="Null Pointer", duration="03:10"),
)
