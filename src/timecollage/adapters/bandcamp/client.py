"""HTTP client for Bandcamp's public search and track pages."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from timecollage.adapters.http_resilience import ResilientClient

from .parser import SearchResult, parse_search_results, parse_track_duration_ms

if TYPE_CHECKING:
    from collections.abc import Callable

    from timecollage.config.bandcamp import BandcampConfig
    from timecollage.config.http_resilience import ResilienceConfig

log = getLogger(__name__)

TRACK_ITEM_TYPE = "t"


class BandcampClient:
    def __init__(
        self,
        *,
        config: BandcampConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient
        self._client: ResilientClient | None = None

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def search_tracks(self, query: str) -> list[SearchResult]:
        response = await self._http().get(
            "search", params={"q": query, "item_type": TRACK_ITEM_TYPE, "page": 1}
        )
        response.raise_for_status()
        results = parse_search_results(response.text)
        log.debug("Bandcamp query [%s] returned [%d] results", query, len(results))
        return results

    async def track_duration_ms(self, url: str) -> int | None:
        response = await self._http().get(url)
        response.raise_for_status()
        return parse_track_duration_ms(response.text)

    def _http(self) -> ResilientClient:
        if self._client is None:
            self._client = self._client_factory(self._resilience)
        return self._client
