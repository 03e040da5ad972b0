"""Group resolved tracks into ranked per-album listening totals."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from timecollage.common.text import format_duration
from timecollage.config.matching import DEFAULT_ARTIST_SIMILARITY_THRESHOLD

from .matching import Similarity, artist_similarity
from .model import UNKNOWN_DURATION, ActivitySummary, AlbumListening
from .resolution import not_found_message

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime

    from .model import Album, Track

log = getLogger(__name__)

DEFAULT_MAX_ALBUMS = 25


@dataclass(frozen=True, slots=True)
class AggregationConfig:
    artist_similarity_threshold: float = DEFAULT_ARTIST_SIMILARITY_THRESHOLD
    max_albums: int = DEFAULT_MAX_ALBUMS
    similarity: Similarity = artist_similarity


@dataclass(slots=True)
class _AlbumTally:
    album: Album
    total_ms: int
    incomplete: bool
    various_artists: bool = False
    track_count: int = 1

    def freeze(self) -> AlbumListening:
        total = self.total_ms if self.total_ms > 0 else UNKNOWN_DURATION
        return AlbumListening(
            album=self.album,
            total_ms=total,
            is_data_incomplete=self.incomplete,
            is_various_artists=self.various_artists,
            track_count=self.track_count,
            display_duration=format_duration(total) if total > 0 else None,
        )


def aggregate(
    user: str,
    start: datetime,
    end: datetime,
    tracks: Iterable[Track],
    *,
    config: AggregationConfig | None = None,
    diagnostics: Iterable[str] = (),
) -> ActivitySummary:
    """Build the ranked activity summary for ``tracks``.

    Albums are grouped by the title first seen in this batch. ``diagnostics`` from
    earlier stages lead the summary's messages; duplicates are dropped.
    """

    settings = config or AggregationConfig()
    tallies: dict[str, _AlbumTally] = {}
    messages: list[str] = list(diagnostics)

    for track in tracks:
        key = track.album.title
        tally = tallies.get(key)
        if tally is None:
            tallies[key] = _AlbumTally(
                album=track.album,
                total_ms=track.duration_ms or 0,
                incomplete=not track.has_duration,
            )
            continue

        tally.track_count += 1
        if not tally.various_artists:
            score = settings.similarity(tally.album.artist, track.artist)
            if score < settings.artist_similarity_threshold:
                log.warning(
                    "Track [%s] artist [%s] is different than album artist [%s], "
                    "similarity = [%.2f] - marking album as various artists",
                    track.title,
                    track.artist,
                    tally.album.artist,
                    score,
                )
                tally.various_artists = True

        if track.duration_ms is None:
            tally.incomplete = True
            messages.append(not_found_message(track))
        else:
            tally.total_ms += track.duration_ms

    ranked = sorted(
        (tally.freeze() for tally in tallies.values()),
        key=lambda listening: -listening.total_ms,
    )
    if len(ranked) > settings.max_albums:
        log.info("Keeping top %d of %d albums", settings.max_albums, len(ranked))

    return ActivitySummary(
        user=user,
        start=start,
        end=end,
        albums=tuple(ranked[: settings.max_albums]),
        messages=tuple(dict.fromkeys(messages)),
    )
