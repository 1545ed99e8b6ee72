"""Markdown export of a note.

The same string backs both the downloaded file and the clipboard copy, so
the output depends on nothing but the note.
"""

import logging
import re
from pathlib import Path

from .formatting import format_time
from .models import VideoNote

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_RE = re.compile(r"[^a-z0-9]", re.IGNORECASE)


def _format_date(note: VideoNote) -> str:
    d = note.updated_at
    return f"{d.month}/{d.day}/{d.year}"


def export_to_markdown(note: VideoNote) -> str:
    """Render *note* as a Markdown document."""
    md = f"# {note.video_title}\n\n"
    md += f"**Video:** [Watch on YouTube]({note.video_url})\n\n"
    md += f"**Date:** {_format_date(note)}\n\n"

    if note.timestamps:
        md += "## Timestamps\n\n"
        for ts in note.timestamps:
            md += f"- **{format_time(ts.time)}** - {ts.label}\n"
        md += "\n"

    if note.tags:
        md += f"**Tags:** {', '.join(note.tags)}\n\n"

    md += f"## Notes\n\n{note.content}"
    return md


def export_filename(note: VideoNote) -> str:
    """File name for the export: the title with non-alphanumerics as ``_``."""
    return _UNSAFE_FILENAME_RE.sub("_", note.video_title) + ".md"


def export_to_file(note: VideoNote, directory: Path) -> Path:
    """Write the Markdown export into *directory* and return its path."""
    path = Path(directory) / export_filename(note)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(export_to_markdown(note), encoding="utf-8", newline="")
    logger.info("Exported note %s to %s", note.id, path)
    return path
