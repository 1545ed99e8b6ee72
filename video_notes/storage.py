"""Note persistence over a single serialized JSON blob.

The store itself is pure collection logic; where the blob lives is decided
by a :class:`NoteBackend` (a JSON file on disk, or memory in tests).  Every
operation re-reads the blob, so the last writer wins when two processes
share a file.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError

from .models import NoteCollection, VideoNote, generate_id, thumbnail_url, utcnow

logger = logging.getLogger(__name__)

STORAGE_KEY = "lecturermate_notes"
DEFAULT_STORAGE_PATH = Path(
    os.environ.get("NOTES_STORAGE_PATH", f"{STORAGE_KEY}.json")
)


class NoteBackend(Protocol):
    """Where the serialized note collection is kept."""

    def load(self) -> str | None: ...

    def save(self, blob: str) -> None: ...


class FileBackend:
    """Keeps the blob in a UTF-8 JSON file."""

    def __init__(self, path: Path = DEFAULT_STORAGE_PATH) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> str | None:
        if not self._path.exists():
            return None
        return self._path.read_text(encoding="utf-8")

    def save(self, blob: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(blob, encoding="utf-8")


class MemoryBackend:
    """Keeps the blob in memory."""

    def __init__(self, blob: str | None = None) -> None:
        self.blob = blob

    def load(self) -> str | None:
        return self.blob

    def save(self, blob: str) -> None:
        self.blob = blob


def create_note(video_id: str, video_title: str, video_url: str) -> VideoNote:
    """Build an empty note for a video. Nothing is persisted."""
    now = utcnow()
    return VideoNote(
        id=generate_id(),
        video_id=video_id,
        video_title=video_title,
        video_url=video_url,
        thumbnail_url=thumbnail_url(video_id),
        created_at=now,
        updated_at=now,
    )


class NoteStorage:
    """CRUD over the persisted note collection."""

    def __init__(self, backend: NoteBackend | None = None) -> None:
        self._backend = backend if backend is not None else FileBackend()

    def _load(self) -> list[VideoNote]:
        """Read the collection.

        A missing or corrupt blob reads as empty; a single unreadable record
        is skipped and the rest are kept.
        """
        try:
            raw = self._backend.load()
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Failed to read notes: %s — treating as empty", exc)
            return []
        if not raw:
            return []
        try:
            records = json.loads(raw)
        except ValueError as exc:
            logger.warning(
                "Stored notes are not valid JSON: %s — treating as empty", exc
            )
            return []
        if not isinstance(records, list):
            logger.warning("Stored notes are not a JSON array — treating as empty")
            return []

        notes = []
        for position, record in enumerate(records):
            try:
                notes.append(VideoNote.model_validate(record))
            except ValidationError as exc:
                logger.warning(
                    "Skipping unreadable note at position %d (%d errors)",
                    position,
                    exc.error_count(),
                )
        return notes

    def _persist(self, notes: list[VideoNote]) -> None:
        """Write the whole collection back."""
        self._backend.save(
            NoteCollection(notes).model_dump_json(
                by_alias=True, exclude_none=True, indent=2
            )
        )

    def list(self) -> list[VideoNote]:
        """Return every stored note in insertion order."""
        return self._load()

    def get(self, video_id: str) -> VideoNote | None:
        """Return the note for *video_id*, or None."""
        return next((n for n in self._load() if n.video_id == video_id), None)

    def get_by_id(self, note_id: str) -> VideoNote | None:
        return next((n for n in self._load() if n.id == note_id), None)

    def save(self, note: VideoNote) -> None:
        """Insert *note*, or replace the entry with the same id.

        A replaced entry gets a fresh ``updated_at``.
        """
        notes = self._load()
        for index, existing in enumerate(notes):
            if existing.id == note.id:
                notes[index] = note.model_copy(update={"updated_at": utcnow()})
                logger.info("Updated note %s (video %s)", note.id, note.video_id)
                break
        else:
            notes.append(note)
            logger.info("Saved note %s — '%s'", note.id, note.video_title)
        self._persist(notes)

    def delete(self, note_id: str) -> None:
        """Remove the note with *note_id*. Unknown ids are ignored."""
        notes = self._load()
        remaining = [n for n in notes if n.id != note_id]
        if len(remaining) != len(notes):
            logger.info("Deleted note %s", note_id)
        self._persist(remaining)

    def create(self, video_id: str, video_title: str, video_url: str) -> VideoNote:
        """Build a new, unsaved note. See :func:`create_note`."""
        return create_note(video_id, video_title, video_url)

    def open_video(self, video_id: str, video_title: str, video_url: str) -> VideoNote:
        """Return the note for *video_id*, creating and saving one if needed."""
        existing = self.get(video_id)
        if existing is not None:
            logger.info("Video %s already has note %s", video_id, existing.id)
            return existing
        note = create_note(video_id, video_title, video_url)
        self.save(note)
        return note

    def search(self, query: str) -> list[VideoNote]:
        """Return notes whose title, content or tags contain the query (case-insensitive)."""
        notes = self._load()
        if not query:
            return notes
        q = query.lower()
        return [
            n
            for n in notes
            if q in n.video_title.lower()
            or q in n.content.lower()
            or any(q in t.lower() for t in n.tags)
        ]

    def stats(self) -> dict[str, int]:
        """Totals across the collection: notes, timestamps and distinct tags."""
        notes = self._load()
        return {
            "notes": len(notes),
            "timestamps": sum(len(n.timestamps) for n in notes),
            "tags": len({t for n in notes for t in n.tags}),
        }

    @property
    def count(self) -> int:
        """Number of stored notes."""
        return len(self._load())
