"""Aggregated listening activity."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from datetime import datetime

    from .music import Album

UNKNOWN_DURATION: Final[int] = -1
VARIOUS_ARTISTS: Final[str] = "Various Artists"
INCOMPLETE_MARKER: Final[str] = "*"
UNKNOWN_DURATION_LABEL: Final[str] = "??:??:??"


@dataclass(frozen=True, slots=True)
class AlbumListening:
    album: Album
    total_ms: int
    is_data_incomplete: bool
    is_various_artists: bool
    track_count: int
    display_duration: str | None

    @property
    def is_fully_unknown(self) -> bool:
        return self.total_ms == UNKNOWN_DURATION

    @property
    def artist_label(self) -> str:
        return VARIOUS_ARTISTS if self.is_various_artists else self.album.artist

    def duration_label(self) -> str:
        label = self.display_duration or UNKNOWN_DURATION_LABEL
        if self.is_data_incomplete:
            return f"{INCOMPLETE_MARKER}{label}"
        return label


@dataclass(frozen=True, slots=True)
class ActivitySummary:
    user: str
    start: datetime
    end: datetime
    albums: tuple[AlbumListening, ...] = ()
    messages: tuple[str, ...] = field(default_factory=tuple)
