"""Answer Engine client.

Thin wrapper around the Gemini ``generateContent`` REST endpoint. Blocking
HTTP runs in a worker thread so the event loop keeps ticking while a prompt
is in flight.
"""
import asyncio
import logging
from typing import Any, Dict, List, Optional

import requests

from .data_models import Citation, EngineAnswer
from .errors import ServiceError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-2.5-flash"


class AnswerEngineClient:

    def __init__(
        self,
        api_key: Optional[str],
        *,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        # A missing key is reported on first use, not here.
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    async def ask(self, prompt: str, grounding_enabled: bool = False) -> EngineAnswer:
        """
        Send a prompt to the engine.

        Args:
            prompt: Natural-language prompt
            grounding_enabled: Allow the engine to consult live search and
                attach citations

        Returns:
            EngineAnswer with text and, when grounded, citations

        Raises:
            ServiceError: On a missing key, transport failure, non-200 status
                or a response without text
        """
        return await asyncio.to_thread(self._generate, prompt, grounding_enabled)

    def _generate(self, prompt: str, grounding_enabled: bool) -> EngineAnswer:
        if not self.api_key:
            raise ServiceError("Answer Engine API key is not configured")

        url = f"{self.base_url}/models/{self.model}:generateContent"
        body: Dict[str, Any] = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        }
        if grounding_enabled:
            body["tools"] = [{"google_search": {}}]
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": self.api_key,
        }

        try:
            response = self.session.post(url, json=body, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("Answer Engine request error: %s", e)
            raise ServiceError(f"request failed: {e}") from e

        if response.status_code != 200:
            logger.error("Answer Engine failed: %s - %s", response.status_code, response.text[:200])
            raise ServiceError(
                f"engine returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ServiceError("engine returned a non-JSON body") from e

        answer = self._parse_answer(data, grounding_enabled)
        logger.debug(
            "Answer Engine replied with %d chars, %d citations",
            len(answer.text),
            len(answer.citations),
        )
        return answer

    def _parse_answer(self, data: Any, grounding_enabled: bool) -> EngineAnswer:
        if not isinstance(data, dict):
            raise ServiceError("engine returned an unexpected body")
        candidates = data.get("candidates") or []
        if not isinstance(candidates, list):
            raise ServiceError("engine returned an unexpected body")
        if not candidates:
            raise ServiceError("engine returned no candidates")
        candidate = candidates[0]
        if not isinstance(candidate, dict):
            raise ServiceError("engine returned an unexpected body")

        content = candidate.get("content") or {}
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list):
            parts = []
        texts = []
        for part in parts:
            if not isinstance(part, dict) or "text" not in part:
                continue
            if not isinstance(part["text"], str):
                raise ServiceError("engine returned an unexpected body")
            texts.append(part["text"])
        text = "".join(texts)
        if not text:
            raise ServiceError("engine returned an empty answer")

        citations: List[Citation] = []
        if grounding_enabled:
            metadata = candidate.get("groundingMetadata")
            chunks = metadata.get("groundingChunks") if isinstance(metadata, dict) else None
            for chunk in chunks if isinstance(chunks, list) else []:
                web = chunk.get("web") if isinstance(chunk, dict) else None
                if not isinstance(web, dict):
                    continue
                title, uri = web.get("title"), web.get("uri")
                citations.append(
                    Citation(
                        title=title if isinstance(title, str) else "",
                        uri=uri if isinstance(uri, str) else "",
                    )
                )

        return EngineAnswer(text=text, citations=tuple(citations))

    def close(self) -> None:
        """Close the HTTP session."""
        self.session.close()
