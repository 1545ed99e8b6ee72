"""YouTube URL parsing, oEmbed title lookup and the add-video flow."""

from __future__ import annotations

import logging
import os
import re
from typing import NamedTuple
from urllib.parse import parse_qs, urlparse

import httpx

from .models import VideoNote
from .storage import NoteStorage

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
PRIMARY_HOST = "youtube.com"
SHORT_HOST = "youtu.be"
OEMBED_URL = os.environ.get("OEMBED_URL", "https://www.youtube.com/oembed")
WATCH_URL_TEMPLATE = "https://www.youtube.com/watch?v={video_id}"
PLACEHOLDER_TITLE = "Untitled Video"
REQUEST_TIMEOUT = 10

# "90", "90s", "1m30s", "1h2m3s"
_OFFSET_RE = re.compile(r"^(?:(\d+)h)?(?:(\d+)m)?(?:(\d+)s?)?$")


class InvalidVideoUrlError(ValueError):
    """The pasted text is not a supported video URL."""


class VideoUrl(NamedTuple):
    video_id: str | None
    start_offset_seconds: int = 0


def _parse_offset(value: str | None) -> int:
    """Convert a ``t=`` value to whole seconds; 0 when absent or unparsable."""
    if not value:
        return 0
    match = _OFFSET_RE.match(value.strip().lower())
    if not match or not any(match.groups()):
        return 0
    hours, minutes, seconds = (int(g) if g else 0 for g in match.groups())
    return hours * 3600 + minutes * 60 + seconds


def parse_video_url(url: str) -> VideoUrl:
    """Extract the video id and start offset from a pasted URL.

    Unsupported hosts and strings that are not URLs give ``video_id=None``.
    """
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return VideoUrl(None)
    if not parsed.scheme or not parsed.netloc:
        return VideoUrl(None)

    host = (parsed.hostname or "").lower()
    query = parse_qs(parsed.query)
    offset = _parse_offset(query.get("t", [None])[0])

    if PRIMARY_HOST in host:
        video_id = query.get("v", [None])[0]
    elif SHORT_HOST in host:
        video_id = parsed.path.lstrip("/").split("/", 1)[0]
    else:
        return VideoUrl(None)

    if not video_id:
        return VideoUrl(None)
    return VideoUrl(video_id, offset)


async def fetch_video_title(
    video_id: str, *, transport: httpx.AsyncBaseTransport | None = None
) -> str:
    """Look up the video's title via oEmbed.

    Any failure falls back to :data:`PLACEHOLDER_TITLE`.
    """
    params = {"url": WATCH_URL_TEMPLATE.format(video_id=video_id), "format": "json"}
    try:
        async with httpx.AsyncClient(
            timeout=REQUEST_TIMEOUT, transport=transport
        ) as client:
            resp = await client.get(OEMBED_URL, params=params)
            resp.raise_for_status()
            data = resp.json()
    except httpx.HTTPError as exc:
        logger.warning("oEmbed lookup failed for %s: %s", video_id, exc)
        return PLACEHOLDER_TITLE
    except ValueError as exc:
        logger.warning("oEmbed returned invalid JSON for %s: %s", video_id, exc)
        return PLACEHOLDER_TITLE

    title = data.get("title") if isinstance(data, dict) else None
    if not isinstance(title, str) or not title.strip():
        return PLACEHOLDER_TITLE
    return title


async def add_video(
    storage: NoteStorage,
    url: str,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> VideoNote:
    """Open the note for a pasted video URL, creating it on first use.

    Raises:
        InvalidVideoUrlError: empty or unsupported URL. Nothing is fetched.
    """
    if not url or not url.strip():
        raise InvalidVideoUrlError("URL required. Please enter a YouTube video URL.")

    video_id, _ = parse_video_url(url)
    if not video_id:
        raise InvalidVideoUrlError("Please enter a valid YouTube video URL.")

    existing = storage.get(video_id)
    if existing is not None:
        return existing

    title = await fetch_video_title(video_id, transport=transport)
    return storage.open_video(video_id, title, url.strip())
