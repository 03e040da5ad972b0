"""Bandcamp duration lookups: search, pick a track page, read its duration."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Protocol

from timecollage.config.matching import DEFAULT_TITLE_SIMILARITY_THRESHOLD
from timecollage.domain.matching import choose_candidate

if TYPE_CHECKING:
    from timecollage.domain.model import Track

    from .parser import SearchResult

log = getLogger(__name__)


class BandcampLookupClient(Protocol):
    async def search_tracks(self, query: str) -> list[SearchResult]: ...

    async def track_duration_ms(self, url: str) -> int | None: ...


class BandcampDurationProvider:
    name = "bandcamp"
    requires_album_id = False

    def __init__(
        self,
        client: BandcampLookupClient,
        *,
        title_threshold: float = DEFAULT_TITLE_SIMILARITY_THRESHOLD,
    ) -> None:
        self._client = client
        self._title_threshold = title_threshold

    async def lookup(self, track: Track) -> int | None:
        query = f"{track.artist} {track.title}"
        results = [result for result in await self._client.search_tracks(query) if result.is_track]
        if not results:
            return None

        match = choose_candidate(
            track.title,
            results,
            title_of=lambda candidate: candidate.title,
            threshold=self._title_threshold,
            context="Bandcamp search",
        )
        if match is None:
            return None
        log.debug("Using Bandcamp track at url [%s] for '%s'", match.url, track.title)
        return await self._client.track_duration_ms(match.url)
