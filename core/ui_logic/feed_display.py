"""
Display Mode Selector for the feed pane.

A pure function of the search session and the headline set. No mode flag is
stored anywhere; the mode is always derived from these two values so the two
can never disagree.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from ..data_models import Citation, HeadlineSet, SearchSession

QUERYING_TEXT = "QUERYING GLOBAL NETWORK..."
LOADING_TEXT = "INITIALIZING FEED..."
FEED_HEADER = "DATA FEED / LIVE STREAM"
SEARCH_HEADER = "SEARCH RESULTS / GROUNDED"


class FeedMode(Enum):
    QUERYING = "querying"
    SEARCH_RESULT = "search_result"
    HEADLINES = "headlines"
    LOADING = "loading"


@dataclass(frozen=True, slots=True)
class FeedView:
    """What the feed pane should render."""
    mode: FeedMode
    header: str
    lines: Tuple[str, ...] = ()
    citations: Tuple[Citation, ...] = ()

    @property
    def shows_search(self) -> bool:
        return self.mode in (FeedMode.QUERYING, FeedMode.SEARCH_RESULT)


def select_feed_view(search: SearchSession, headlines: HeadlineSet) -> FeedView:
    """
    Decide what the feed pane renders.

    Args:
        search: Current search session
        headlines: Current headline set (empty while loading)

    Returns:
        FeedView for exactly one of: querying indicator, search result with
        citations, headline list, or the loading placeholder
    """
    if search.pending:
        return FeedView(mode=FeedMode.QUERYING, header=FEED_HEADER, lines=(QUERYING_TEXT,))

    if search.result_text is not None:
        return FeedView(
            mode=FeedMode.SEARCH_RESULT,
            header=SEARCH_HEADER,
            lines=(search.result_text,),
            citations=search.citations,
        )

    if not headlines:
        return FeedView(mode=FeedMode.LOADING, header=FEED_HEADER, lines=(LOADING_TEXT,))

    numbered = tuple(f"[{index:02d}] {headline}" for index, headline in enumerate(headlines, start=1))
    return FeedView(mode=FeedMode.HEADLINES, header=FEED_HEADER, lines=numbered)
