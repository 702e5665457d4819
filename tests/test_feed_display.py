from core.data_models import Citation, SearchSession
from core.ui_logic.feed_display import (
    FEED_HEADER,
    LOADING_TEXT,
    QUERYING_TEXT,
    SEARCH_HEADER,
    FeedMode,
    select_feed_view,
)

HEADLINES = ("Alpha", "Beta", "Gamma")


def test_pending_shows_querying_indicator():
    view = select_feed_view(SearchSession(query="q", pending=True), HEADLINES)

    assert view.mode is FeedMode.QUERYING
    assert view.lines == (QUERYING_TEXT,)
    assert view.citations == ()


def test_result_shows_search_view_with_citations():
    citations = (Citation("Src", "https://example.com"),)
    view = select_feed_view(
        SearchSession(query="q", result_text="Answer", citations=citations), HEADLINES
    )

    assert view.mode is FeedMode.SEARCH_RESULT
    assert view.header == SEARCH_HEADER
    assert view.lines == ("Answer",)
    assert view.citations == citations


def test_cleared_session_falls_back_to_headlines():
    view = select_feed_view(SearchSession(), HEADLINES)

    assert view.mode is FeedMode.HEADLINES
    assert view.header == FEED_HEADER
    assert view.lines == ("[01] Alpha", "[02] Beta", "[03] Gamma")
    assert not view.shows_search


def test_empty_headlines_show_loading_placeholder():
    view = select_feed_view(SearchSession(), ())

    assert view.mode is FeedMode.LOADING
    assert view.lines == (LOADING_TEXT,)


def test_pending_wins_over_stale_result_fields():
    # pending is checked first even if a result string is somehow present
    view = select_feed_view(SearchSession(query="q", result_text="old", pending=True), HEADLINES)
    assert view.mode is FeedMode.QUERYING
