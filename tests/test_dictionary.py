"""Tests for the dictionary lookup client (mocked HTTP)."""

import httpx
import pytest

from assistant.dictionary import (
    FAILED_MESSAGE,
    NETWORK_MESSAGE,
    NOT_FOUND_MESSAGE,
    lookup,
)
from assistant.errors import InputValidationError

ENTRY = {
    "word": "serendipity",
    "phonetic": "/ˌsɛɹənˈdɪpɪti/",
    "phonetics": [{"text": "/ˌsɛɹənˈdɪpɪti/", "audio": "https://audio.test/s.mp3"}, {}],
    "meanings": [
        {
            "partOfSpeech": "noun",
            "definitions": [
                {
                    "definition": "A fortunate accident.",
                    "example": "It was pure serendipity.",
                    "synonyms": ["chance"],
                    "antonyms": [],
                }
            ],
        }
    ],
    "license": {"name": "CC BY-SA 3.0"},
}


def _transport(handler) -> httpx.MockTransport:
    return httpx.MockTransport(handler)


class TestLookup:
    @pytest.mark.asyncio
    async def test_found(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[ENTRY, {"word": "other"}])

        result = await lookup("  serendipity ", transport=_transport(handler))

        assert result.found
        assert result.status == "found"
        assert result.entry.word == "serendipity"
        assert result.entry.phonetics[0].audio == "https://audio.test/s.mp3"
        assert result.entry.meanings[0].part_of_speech == "noun"
        assert result.entry.meanings[0].definitions[0].synonyms == ["chance"]
        assert seen[0].url.path.endswith("/entries/en/serendipity")

    @pytest.mark.asyncio
    async def test_word_is_url_encoded(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(404, json={"title": "No Definitions Found"})

        await lookup("ice cream/x", transport=_transport(handler))
        assert seen[0].url.raw_path.endswith(b"/ice%20cream%2Fx")

    @pytest.mark.asyncio
    async def test_not_found_is_a_result(self) -> None:
        transport = _transport(
            lambda r: httpx.Response(404, json={"title": "No Definitions Found"})
        )
        result = await lookup("asdfgh", transport=transport)
        assert result.status == "not_found"
        assert result.entry is None
        assert result.message == NOT_FOUND_MESSAGE

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [400, 429, 500, 503])
    async def test_other_errors_fail(self, status: int) -> None:
        result = await lookup("word", transport=_transport(lambda r: httpx.Response(status)))
        assert result.status == "failed"
        assert result.message == FAILED_MESSAGE

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [[], {"word": "x"}, [{"phonetic": "x"}]])
    async def test_unexpected_payload_fails(self, payload) -> None:
        transport = _transport(lambda r: httpx.Response(200, json=payload))
        result = await lookup("word", transport=transport)
        assert result.status == "failed"

    @pytest.mark.asyncio
    async def test_network_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("offline", request=request)

        result = await lookup("word", transport=_transport(handler))
        assert result.status == "network_error"
        assert result.message == NETWORK_MESSAGE

    @pytest.mark.asyncio
    async def test_outcomes_distinguishable(self) -> None:
        def raise_connect(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("offline", request=request)

        statuses = {
            (await lookup("w", transport=_transport(lambda r: httpx.Response(404)))).status,
            (await lookup("w", transport=_transport(lambda r: httpx.Response(500)))).status,
            (await lookup("w", transport=_transport(raise_connect))).status,
        }
        assert len(statuses) == 3

    @pytest.mark.asyncio
    async def test_empty_word_rejected(self) -> None:
        with pytest.raises(InputValidationError):
            await lookup("   ")
