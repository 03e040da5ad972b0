"""Domain model for listening history and its aggregates."""

from __future__ import annotations

from .activity import (
    UNKNOWN_DURATION,
    VARIOUS_ARTISTS,
    ActivitySummary,
    AlbumListening,
)
from .music import Album, Track, is_valid_duration

__all__ = [
    "UNKNOWN_DURATION",
    "VARIOUS_ARTISTS",
    "ActivitySummary",
    "Album",
    "AlbumListening",
    "Track",
    "is_valid_duration",
]
