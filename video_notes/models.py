"""Pydantic models for video notes, timestamps and flashcards.

Field names are snake_case in Python and camelCase on disk, so a stored
collection keeps the ``videoId`` / ``createdAt`` shape of the browser app.
"""

import time
from datetime import UTC, datetime
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, RootModel, model_validator
from pydantic.alias_generators import to_camel

THUMBNAIL_URL_TEMPLATE = "https://img.youtube.com/vi/{video_id}/maxresdefault.jpg"

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _to_base36(value: int) -> str:
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits)) or "0"


def generate_id() -> str:
    """Return a short id: random hex followed by the base-36 epoch millis."""
    return uuid4().hex[:10] + _to_base36(time.time_ns() // 1_000_000)


def utcnow() -> datetime:
    return datetime.now(UTC)


def thumbnail_url(video_id: str) -> str:
    """Derive the thumbnail URL for *video_id*."""
    return THUMBNAIL_URL_TEMPLATE.format(video_id=video_id)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Timestamp(CamelModel):
    """A labelled position in a video's playback."""

    id: str = Field(default_factory=generate_id)
    time: float = Field(
        ..., ge=0, allow_inf_nan=False, description="Seconds from the start"
    )
    label: str = Field(..., description="Display label")
    note: str | None = Field(default=None, description="Optional free text")


class VideoNote(CamelModel):
    """Notes, tags and timestamps attached to one video."""

    id: str = Field(default_factory=generate_id)
    video_id: str = Field(..., min_length=1)
    video_title: str
    video_url: str
    thumbnail_url: str = ""
    content: str = ""
    timestamps: list[Timestamp] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    tags: list[str] = Field(default_factory=list)
    folder: str | None = None

    @model_validator(mode="after")
    def _derive_thumbnail(self) -> "VideoNote":
        if not self.thumbnail_url:
            self.thumbnail_url = thumbnail_url(self.video_id)
        return self


class NoteCollection(RootModel[list[VideoNote]]):
    """The persisted blob: a JSON array of notes."""

    root: list[VideoNote] = Field(default_factory=list)


class Flashcard(CamelModel):
    """A study card generated from a note. Never persisted."""

    id: str = Field(default_factory=generate_id)
    question: str
    answer: str
    note_id: str
    mastered: bool = False
    last_reviewed: datetime | None = None
