"""Edits on a note: timestamps, tags, content and folder.

Each function returns a new note and leaves its argument untouched, with
``updated_at`` set to the time of the edit.
"""

from .formatting import format_time
from .models import Timestamp, VideoNote, generate_id, utcnow


class TagExistsError(ValueError):
    """The note already carries this tag."""


def add_timestamp(
    note: VideoNote, time: float, label: str = "", note_text: str | None = None
) -> VideoNote:
    """Insert a timestamp at *time*, keeping the list sorted by time.

    The sort is stable, so equal times keep their insertion order.  A
    negative or non-finite *time* raises :class:`pydantic.ValidationError`.
    """
    timestamp = Timestamp(id=generate_id(), time=time, label=label, note=note_text)
    if not label:
        timestamp.label = f"Timestamp at {format_time(timestamp.time)}"
    timestamps = sorted([*note.timestamps, timestamp], key=lambda t: t.time)
    return note.model_copy(update={"timestamps": timestamps, "updated_at": utcnow()})


def remove_timestamp(note: VideoNote, timestamp_id: str) -> VideoNote:
    timestamps = [t for t in note.timestamps if t.id != timestamp_id]
    return note.model_copy(update={"timestamps": timestamps, "updated_at": utcnow()})


def add_tag(note: VideoNote, tag: str) -> VideoNote:
    """Append *tag* (whitespace-stripped). Blank tags are ignored."""
    tag = tag.strip()
    if not tag:
        return note
    if tag in note.tags:
        raise TagExistsError(f"Tag '{tag}' is already added.")
    return note.model_copy(update={"tags": [*note.tags, tag], "updated_at": utcnow()})


def remove_tag(note: VideoNote, tag: str) -> VideoNote:
    tags = [t for t in note.tags if t != tag]
    return note.model_copy(update={"tags": tags, "updated_at": utcnow()})


def update_content(note: VideoNote, content: str) -> VideoNote:
    return note.model_copy(update={"content": content, "updated_at": utcnow()})


def set_folder(note: VideoNote, folder: str | None) -> VideoNote:
    return note.model_copy(update={"folder": folder or None, "updated_at": utcnow()})
