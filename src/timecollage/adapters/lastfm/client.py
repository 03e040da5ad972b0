"""HTTP client for the Last.fm API."""

from __future__ import annotations

from dataclasses import replace
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from timecollage.adapters.http_resilience import ResilientClient
from timecollage.config.http_resilience import CacheConfig
from timecollage.config.lastfm import LASTFM_BASE_URL, default_lastfm_resilience
from timecollage.domain.ports import ProviderLookupError

from .schema import (
    ErrorResponse,
    RecentTracksResponse,
    ResponseAttr,
    TrackInfo,
    TrackInfoResponse,
    TrackPayload,
    should_cache_payload,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from timecollage.config.http_resilience import ResilienceConfig
    from timecollage.config.lastfm import LastFmConfig

log = getLogger(__name__)

DEFAULT_BATCH_SIZE = 200
TRACK_NOT_FOUND = 6


def datetime_to_epoch_seconds(value: datetime) -> int:
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return int(value.astimezone(UTC).timestamp())


def lastfm_resilience() -> ResilienceConfig:
    """Default Last.fm resilience with now-playing pages kept out of the cache."""

    return replace(
        default_lastfm_resilience(),
        cache=CacheConfig(backend="memory", should_cache=should_cache_payload),
    )


class LastFmAPIError(ProviderLookupError):
    """Raised when the Last.fm API returns an application-level error."""

    def __init__(self, message: str, *, code: int | None = None) -> None:
        super().__init__(message)
        self.code = code


class LastFmClient:
    """Thin wrapper over the two Last.fm methods the collage needs."""

    def __init__(
        self,
        *,
        config: LastFmConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient
        self._client: ResilientClient | None = None

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def recent_tracks(
        self,
        *,
        user: str,
        page: int,
        limit: int = DEFAULT_BATCH_SIZE,
        from_ts: int | None = None,
        to_ts: int | None = None,
        extended: bool = True,
    ) -> tuple[list[TrackPayload], ResponseAttr]:
        params: dict[str, str | int] = {
            "method": "user.getrecenttracks",
            "user": user,
            "limit": limit,
            "page": page,
        }
        if from_ts is not None:
            params["from"] = from_ts
        if to_ts is not None:
            params["to"] = to_ts
        if extended:
            params["extended"] = 1

        payload = await self._perform_request(params)
        if "recenttracks" not in payload:
            raise LastFmAPIError("Unexpected Last.fm response payload")
        recent = RecentTracksResponse.model_validate(payload).recenttracks
        return recent.track, recent.attr

    async def track_info(self, *, artist: str, title: str) -> TrackInfo:
        payload = await self._perform_request(
            {"method": "track.getInfo", "artist": artist, "track": title}
        )
        if "track" not in payload:
            raise LastFmAPIError("Unexpected Last.fm response payload")
        return TrackInfoResponse.model_validate(payload).track

    async def _perform_request(self, params: dict[str, str | int]) -> dict[str, object]:
        query = httpx.QueryParams(
            {**params, "api_key": self._config.api_key, "format": "json"}
        )
        base_url = self._resilience.base_url or LASTFM_BASE_URL
        response = await self._http().get(base_url, params=query)

        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict) and "error" in payload:
            error_payload = ErrorResponse.model_validate(payload)
            if error_payload.error != TRACK_NOT_FOUND:
                log.error(f"Last.fm API error {error_payload.error}: {error_payload.message}")
            raise LastFmAPIError(error_payload.message, code=error_payload.error) from None
        response.raise_for_status()

        if not isinstance(payload, dict):
            raise LastFmAPIError("Unexpected Last.fm response payload")
        return payload  # pyright: ignore[reportUnknownVariableType]

    def _http(self) -> ResilientClient:
        if self._client is None:
            self._client = self._client_factory(self._resilience)
        return self._client
