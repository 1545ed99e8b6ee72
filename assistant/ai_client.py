"""Thin async HTTP client for the AI relay.

Wraps ``POST /ai-explain`` for the three request types and turns relay
failures into :mod:`assistant.errors` exceptions.
"""

from __future__ import annotations

import json
import logging
import os
import re
from typing import Any

import httpx

from assistant.errors import (
    FlashcardParseError,
    InputValidationError,
    NotConfiguredError,
    QuotaExhaustedError,
    RateLimitedError,
    RelayError,
    RelayUnavailableError,
    UpstreamError,
)
from video_notes.models import Flashcard, VideoNote, generate_id
from video_notes.study import has_content, note_context

logger = logging.getLogger(__name__)

BASE_URL = os.getenv("AI_RELAY_URL", "http://localhost:8000")
_TIMEOUT = 60  # seconds

_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)```")

_ERRORS_BY_CODE: dict[str, type[RelayError]] = {
    "rate_limited": RateLimitedError,
    "quota_exhausted": QuotaExhaustedError,
    "upstream_error": UpstreamError,
    "not_configured": NotConfiguredError,
    "gateway_unreachable": NotConfiguredError,
}
_ERRORS_BY_STATUS: dict[int, type[RelayError]] = {
    429: RateLimitedError,
    402: QuotaExhaustedError,
}


def parse_flashcards(content: str, note_id: str) -> list[Flashcard]:
    """Parse the relay's flashcard reply, with or without a code fence."""
    match = _FENCE_RE.search(content)
    raw = match.group(1) if match else content
    try:
        data = json.loads(raw.strip())
    except json.JSONDecodeError as exc:
        logger.error("Failed to parse flashcards: %s", content[:200])
        raise FlashcardParseError("Failed to parse AI response") from exc

    if not isinstance(data, list):
        raise FlashcardParseError("Failed to parse AI response: expected a list")

    cards = []
    for item in data:
        if not isinstance(item, dict):
            raise FlashcardParseError("Failed to parse AI response: bad flashcard")
        question, answer = item.get("question"), item.get("answer")
        if not isinstance(question, str) or not isinstance(answer, str):
            raise FlashcardParseError(
                "Failed to parse AI response: flashcard needs a question and answer"
            )
        cards.append(
            Flashcard(id=generate_id(), question=question, answer=answer, note_id=note_id)
        )
    return cards


def _error_from_response(resp: httpx.Response) -> RelayError:
    """Map a failed relay response to the matching exception."""
    try:
        body = resp.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}
    message = body.get("error") or f"AI relay error: {resp.status_code}"
    error_cls = _ERRORS_BY_CODE.get(body.get("code", "")) or _ERRORS_BY_STATUS.get(
        resp.status_code, UpstreamError
    )
    return error_cls(message, status_code=resp.status_code)


class AIClient:
    """Calls the relay for explanations, summaries and flashcards."""

    def __init__(
        self,
        base_url: str = BASE_URL,
        timeout: float = _TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = f"{base_url.rstrip('/')}/ai-explain"
        self._timeout = timeout
        self._transport = transport

    async def _request(self, payload: dict[str, Any]) -> str:
        """POST /ai-explain — return the content or raise a RelayError."""
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                resp = await client.post(self._url, json=payload)
        except httpx.HTTPError as exc:
            logger.error("AI relay unreachable at %s: %s", self._url, exc)
            raise RelayUnavailableError(
                "Could not reach the AI service. Please check your connection."
            ) from exc

        if resp.is_error:
            error = _error_from_response(resp)
            logger.warning(
                "AI %s request failed (%s): %s",
                payload["type"],
                resp.status_code,
                error.message,
            )
            raise error

        try:
            content = resp.json().get("content")
        except (ValueError, AttributeError):
            content = None
        if not isinstance(content, str):
            raise UpstreamError("AI relay returned no content", status_code=resp.status_code)
        return content

    async def explain(self, text: str, context: str | None = None) -> str:
        """Explain a highlighted passage, optionally with note context."""
        if not text or not text.strip():
            raise InputValidationError("Highlight some text to get an AI explanation.")
        payload: dict[str, Any] = {"text": text, "type": "explain"}
        if context:
            payload["context"] = context
        return await self._request(payload)

    async def summarize(self, note: VideoNote) -> str:
        """Summarize a note into bullet points."""
        if not has_content(note):
            raise InputValidationError("Add some notes or timestamps first to summarize.")
        return await self._request(
            {"text": note_context(note, bracket_labels=True), "type": "summarize"}
        )

    async def generate_flashcards(self, note: VideoNote) -> list[Flashcard]:
        """Generate a fresh flashcard deck for a note."""
        if not has_content(note):
            raise InputValidationError(
                "Add some notes or timestamps first to generate flashcards."
            )
        content = await self._request({"text": note_context(note), "type": "flashcards"})
        cards = parse_flashcards(content, note.id)
        logger.info("Generated %d flashcards for note %s", len(cards), note.id)
        return cards
