"""News Feed Loader: a single ungrounded prompt for three headlines."""
import logging
from typing import Tuple

from .api_client import AnswerEngineClient
from .data_models import HeadlineSet
from .errors import ServiceError
from .hud_state import HudState, Slot

logger = logging.getLogger(__name__)

MAX_HEADLINES = 3

NEWS_PROMPT = (
    "Generate 3 short, punchy, cyberpunk-style futuristic news headlines based on "
    "real current technology trends. Return them as a plain text list separated by "
    "newlines. Do not include numbers or bullet points."
)

FALLBACK_HEADLINES: Tuple[str, ...] = (
    "NETWORK ERROR: UNABLE TO SYNC WITH WORLD DATA.",
    "LOCAL CACHE LOADED.",
    "SYSTEM DIAGNOSTICS RECOMMENDED.",
)


def split_headlines(text: str, limit: int = MAX_HEADLINES) -> HeadlineSet:
    """Non-blank lines in original order, clamped to ``limit``."""
    lines = [line.strip() for line in text.splitlines()]
    return tuple(line for line in lines if line)[:limit]


class NewsFeedLoader:
    """Sole writer of the headlines slot."""

    def __init__(self, state: HudState, engine: AnswerEngineClient) -> None:
        self._headlines = state.claim(Slot.HEADLINES, "news_loader")
        self.engine = engine
        self._loaded = False

    @property
    def loaded(self) -> bool:
        return self._loaded

    async def load(self) -> HeadlineSet:
        """Load once per session; later calls return the current set."""
        if self._loaded:
            logger.debug("Headlines already loaded this session")
            return self._headlines.get()
        self._loaded = True
        return await self._fetch()

    async def refresh(self) -> HeadlineSet:
        """Explicit manual refresh; replaces the set wholesale."""
        self._loaded = True
        return await self._fetch()

    async def _fetch(self) -> HeadlineSet:
        try:
            answer = await self.engine.ask(NEWS_PROMPT, grounding_enabled=False)
        except ServiceError as exc:
            logger.error("Failed to fetch news: %s", exc)
            headlines = FALLBACK_HEADLINES
        else:
            headlines = split_headlines(answer.text)
            if headlines:
                logger.info("Loaded %d headlines", len(headlines))
            else:
                logger.warning("News answer had no usable lines")
                headlines = FALLBACK_HEADLINES
        self._headlines.set(headlines)
        return headlines
