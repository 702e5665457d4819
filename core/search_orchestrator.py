"""
Search Orchestrator.

Drives the feed pane's search session through Idle -> Pending -> Resolved.
Every submitted query is tagged with a monotonically increasing request id;
a response is committed only while its id is still the latest one issued, so
a slow early query can never overwrite a faster later one.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, List, Optional, Tuple
from urllib.parse import urlparse

from .api_client import AnswerEngineClient
from .data_models import Citation, SearchSession
from .errors import ServiceError
from .hud_state import HudState, Slot

logger = logging.getLogger(__name__)

FAILURE_TEXT = "CONNECTION INTERRUPTED. TARGET NOT FOUND."


class SearchPhase(Enum):
    IDLE = "idle"
    PENDING = "pending"
    RESOLVED = "resolved"


def phase_of(session: SearchSession) -> SearchPhase:
    if session.pending:
        return SearchPhase.PENDING
    if session.result_text is not None:
        return SearchPhase.RESOLVED
    return SearchPhase.IDLE


@dataclass
class SearchEvent:
    """Represents a search session transition."""
    request_id: int
    phase: SearchPhase
    session: SearchSession

    def __str__(self) -> str:
        return f"SearchEvent(id={self.request_id}, phase={self.phase.value}, query='{self.session.query}')"


# Type alias for search event callbacks
SearchCallback = Callable[[SearchEvent], None]


def filter_citations(citations: Iterable[Citation]) -> Tuple[Citation, ...]:
    """
    Keep only citations with a resolvable http(s) link.

    Citations without a title are labelled with the link's host.
    """
    kept: List[Citation] = []
    for citation in citations:
        uri = (citation.uri or "").strip()
        parsed = urlparse(uri)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            continue
        title = (citation.title or "").strip() or parsed.netloc
        kept.append(Citation(title=title, uri=uri))
    return tuple(kept)


class SearchOrchestrator:
    """
    Sole writer of the search slot.

    Only one session is live at a time. Submitting while a request is in
    flight supersedes it; the superseded response is dropped on arrival.
    """

    def __init__(self, state: HudState, engine: AnswerEngineClient) -> None:
        self._search = state.claim(Slot.SEARCH, "search_orchestrator")
        self.engine = engine
        self._latest_request_id = 0
        self._callbacks: List[SearchCallback] = []

    @property
    def session(self) -> SearchSession:
        return self._search.get()

    @property
    def phase(self) -> SearchPhase:
        return phase_of(self.session)

    @property
    def latest_request_id(self) -> int:
        return self._latest_request_id

    def register_callback(self, callback: SearchCallback) -> None:
        if callback not in self._callbacks:
            self._callbacks.append(callback)

    def unregister_callback(self, callback: SearchCallback) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    async def submit(self, query: str) -> Optional[SearchSession]:
        """
        Run a grounded search for ``query``.

        Args:
            query: Raw text from the input box

        Returns:
            The committed session, or None if the query was blank or the
            response was superseded before it arrived
        """
        text = (query or "").strip()
        if not text:
            return None

        self._latest_request_id += 1
        request_id = self._latest_request_id
        self._commit(request_id, SearchSession(query=text, pending=True))
        logger.info("Search #%d submitted: %s", request_id, text)

        try:
            answer = await self.engine.ask(text, grounding_enabled=True)
        except ServiceError as exc:
            logger.error("Search #%d failed: %s", request_id, exc)
            session = SearchSession(query=text, result_text=FAILURE_TEXT)
        else:
            session = SearchSession(
                query=text,
                result_text=answer.text,
                citations=filter_citations(answer.citations),
            )

        if request_id != self._latest_request_id:
            logger.debug(
                "Dropping stale search #%d (latest is #%d)", request_id, self._latest_request_id
            )
            return None

        self._commit(request_id, session)
        return session

    def clear(self) -> None:
        """Home action: back to Idle, invalidating any in-flight request."""
        self._latest_request_id += 1
        if self.session != SearchSession():
            logger.info("Search cleared")
        self._commit(self._latest_request_id, SearchSession())

    def _commit(self, request_id: int, session: SearchSession) -> None:
        self._search.set(session)
        event = SearchEvent(request_id=request_id, phase=phase_of(session), session=session)
        for callback in list(self._callbacks):
            try:
                callback(event)
            except Exception as e:
                logger.error("Search callback error: %s", e)
