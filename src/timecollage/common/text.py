"""Small text helpers shared by the aggregator and the renderer."""

from __future__ import annotations

TRIMMED_INDICATOR = "..."


def format_duration(milliseconds: int) -> str:
    """Format a duration as ``HH:MM:SS``; hours keep counting past 24."""

    if milliseconds < 0:
        raise ValueError("Durations cannot be negative")
    total_seconds = milliseconds // 1000
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def trim_text(text: str, max_length: int, indicator: str = TRIMMED_INDICATOR) -> str:
    if len(text) <= max_length:
        return text
    return text[: max(max_length - len(indicator), 0)] + indicator
