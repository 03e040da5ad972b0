"""Tracks and albums as reported by the listening-history source."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Album:
    """Album metadata; ``artist`` is whatever the history source claimed."""

    title: str
    artist: str
    cover_url: str | None = None
    mbid: str | None = None

    @property
    def has_external_id(self) -> bool:
        return bool(self.mbid and self.mbid.strip())


@dataclass(slots=True)
class Track:
    """One played song.

    ``duration_ms`` starts out as ``None`` and is filled in once by the duration
    resolver. Non-positive values are never stored.
    """

    title: str
    artist: str
    album: Album
    mbid: str | None = None
    duration_ms: int | None = None

    def __post_init__(self) -> None:
        if self.duration_ms is not None and self.duration_ms <= 0:
            self.duration_ms = None

    @property
    def has_duration(self) -> bool:
        return self.duration_ms is not None

    def describe(self) -> str:
        return f"{self.artist} - {self.title}"


def is_valid_duration(value: object) -> bool:
    """Positive integer milliseconds; bools and floats-with-fraction do not count."""

    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return value > 0
    if isinstance(value, float):
        return value > 0 and value.is_integer()
    return False
