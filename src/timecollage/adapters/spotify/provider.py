"""Spotify search-backed duration lookups."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Protocol

from timecollage.config.matching import DEFAULT_TITLE_SIMILARITY_THRESHOLD
from timecollage.domain.matching import choose_candidate

from .client import build_track_query

if TYPE_CHECKING:
    from timecollage.domain.model import Track

    from .schema import SpotifyTrack

log = getLogger(__name__)


class TrackSearchClient(Protocol):
    async def search_tracks(self, query: str) -> list[SpotifyTrack]: ...


class SpotifyDurationProvider:
    name = "spotify"
    requires_album_id = False

    def __init__(
        self,
        client: TrackSearchClient,
        *,
        title_threshold: float = DEFAULT_TITLE_SIMILARITY_THRESHOLD,
    ) -> None:
        self._client = client
        self._title_threshold = title_threshold

    async def lookup(self, track: Track) -> int | None:
        query = build_track_query(title=track.title, artist=track.artist, album=track.album.title)
        results = await self._client.search_tracks(query)
        if not results:
            log.debug("Spotify returned no results for %s", query)
            return None

        match = choose_candidate(
            track.title,
            results,
            title_of=lambda candidate: candidate.name,
            threshold=self._title_threshold,
            context="Spotify search",
        )
        if match is None:
            return None
        return match.duration_ms
