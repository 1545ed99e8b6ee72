"""Word definitions from the public Free Dictionary API."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Literal
from urllib.parse import quote

import httpx
from pydantic import BaseModel, Field, ValidationError

from assistant.errors import InputValidationError
from video_notes.models import CamelModel

logger = logging.getLogger(__name__)

DICTIONARY_API_URL = os.getenv(
    "DICTIONARY_API_URL", "https://api.dictionaryapi.dev/api/v2/entries/en"
)
REQUEST_TIMEOUT = 10

NOT_FOUND_MESSAGE = "Word not found. Try another word."
FAILED_MESSAGE = "Failed to look up word. Please try again."
NETWORK_MESSAGE = "Network error. Please check your connection."

LookupStatus = Literal["found", "not_found", "failed", "network_error"]


class Phonetic(BaseModel):
    text: str | None = None
    audio: str | None = None


class Definition(BaseModel):
    definition: str
    example: str | None = None
    synonyms: list[str] = Field(default_factory=list)


class Meaning(CamelModel):
    part_of_speech: str
    definitions: list[Definition] = Field(default_factory=list)


class DictionaryEntry(BaseModel):
    """One entry as returned by the dictionary API."""

    word: str
    phonetic: str | None = None
    phonetics: list[Phonetic] = Field(default_factory=list)
    meanings: list[Meaning] = Field(default_factory=list)


@dataclass
class LookupResult:
    """Outcome of a lookup; ``entry`` is set only when ``status == "found"``."""

    status: LookupStatus
    word: str
    entry: DictionaryEntry | None = None
    message: str | None = None

    @property
    def found(self) -> bool:
        return self.status == "found"


async def lookup(
    word: str, *, transport: httpx.AsyncBaseTransport | None = None
) -> LookupResult:
    """Look up *word*. Upstream and network failures come back as results.

    Raises:
        InputValidationError: *word* is empty. Nothing is fetched.
    """
    word = (word or "").strip()
    if not word:
        raise InputValidationError("Select a word to look up.")

    url = f"{DICTIONARY_API_URL}/{quote(word, safe='')}"
    try:
        async with httpx.AsyncClient(
            timeout=REQUEST_TIMEOUT, transport=transport
        ) as client:
            resp = await client.get(url)
    except httpx.HTTPError as exc:
        logger.warning("Dictionary lookup for '%s' failed: %s", word, exc)
        return LookupResult("network_error", word, message=NETWORK_MESSAGE)

    if resp.status_code == 404:
        logger.info("Dictionary has no entry for '%s'", word)
        return LookupResult("not_found", word, message=NOT_FOUND_MESSAGE)
    if resp.is_error:
        logger.warning("Dictionary lookup for '%s' returned %d", word, resp.status_code)
        return LookupResult("failed", word, message=FAILED_MESSAGE)

    try:
        data = resp.json()
        if not isinstance(data, list) or not data:
            raise ValueError("expected a non-empty list of entries")
        entry = DictionaryEntry.model_validate(data[0])
    except (ValueError, ValidationError) as exc:
        logger.warning("Unexpected dictionary payload for '%s': %s", word, exc)
        return LookupResult("failed", word, message=FAILED_MESSAGE)

    return LookupResult("found", word, entry=entry)
