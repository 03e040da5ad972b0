"""MusicBrainz API client."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from timecollage.adapters.http_resilience import ResilientClient
from timecollage.domain.ports import ProviderLookupError

from .schema import MusicBrainzRelease

if TYPE_CHECKING:
    from collections.abc import Callable

    from timecollage.config.http_resilience import ResilienceConfig
    from timecollage.config.musicbrainz import MusicBrainzConfig

log = getLogger(__name__)

RELEASE_ENTITY = "release"
DEFAULT_RELEASE_INC = ("recordings",)


class MusicBrainzAPIError(ProviderLookupError):
    """Raised when the MusicBrainz API returns an unexpected response."""


class MusicBrainzClient:
    """Low-level HTTP client for the MusicBrainz API."""

    def __init__(
        self,
        *,
        config: MusicBrainzConfig,
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

    async def fetch_release(
        self,
        *,
        mbid: str,
        inc: tuple[str, ...] | None = None,
    ) -> MusicBrainzRelease:
        inc_values = inc if inc is not None else DEFAULT_RELEASE_INC
        params: dict[str, str] = {"fmt": "json"}
        if inc_values:
            params["inc"] = "+".join(inc_values)

        if self._resilience.base_url is None:
            raise MusicBrainzAPIError("Missing MusicBrainz base_url in resilience configuration")

        response = await self._http().get(f"{RELEASE_ENTITY}/{mbid}", params=params)
        if response.status_code == httpx.codes.NOT_FOUND:
            raise MusicBrainzAPIError(f"MusicBrainz has no release with mbId [{mbid}]")
        response.raise_for_status()

        payload = response.json()
        if not isinstance(payload, dict):
            raise MusicBrainzAPIError("Unexpected MusicBrainz response payload")

        return MusicBrainzRelease.model_validate(payload)

    def _http(self) -> ResilientClient:
        if self._client is None:
            self._client = self._client_factory(self._resilience)
        return self._client
