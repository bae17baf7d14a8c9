from __future__ import annotations


def format_time(seconds: float) -> str:
    """Format a run time in seconds as `MM:SS.mmm`, or `HH:MM:SS.mmm` past the hour."""

    hours = int(seconds / 3600)
    minutes = int((seconds % 3600) / 60)
    rest = seconds % 60

    formatted = f"{minutes:02d}:{rest:06.3f}"
    if hours > 0:
        formatted = f"{hours:02d}:{formatted}"
    return formatted
