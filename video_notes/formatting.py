"""Display helpers for playback positions."""

import math


def format_time(seconds: float) -> str:
    """Format *seconds* as ``M:SS``, or ``H:MM:SS`` past the first hour."""
    total = math.floor(seconds)
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"
