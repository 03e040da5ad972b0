"""Album cover download and decoding."""

from __future__ import annotations

import asyncio
from io import BytesIO
from logging import getLogger
from typing import TYPE_CHECKING

from PIL import Image, ImageOps

from timecollage.adapters.http_resilience import ResilientClient
from timecollage.config.collage import ALBUM_ART_SIZE, artwork_resilience

if TYPE_CHECKING:
    from collections.abc import Callable

    from timecollage.config.http_resilience import ResilienceConfig

log = getLogger(__name__)


def decode_artwork(data: bytes, size: int) -> Image.Image:
    """Decode image bytes and crop-scale them to a ``size`` square."""

    with Image.open(BytesIO(data)) as image:
        return ImageOps.fit(
            image.convert("RGB"), (size, size), method=Image.Resampling.LANCZOS
        )


class ArtworkFetcher:
    def __init__(
        self,
        *,
        size: int = ALBUM_ART_SIZE,
        resilience: ResilienceConfig | None = None,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._size = size
        self._resilience = resilience or artwork_resilience()
        self._client_factory = client_factory or ResilientClient
        self._client: ResilientClient | None = None

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def fetch(self, url: str) -> Image.Image:
        response = await self._http().get(url)
        response.raise_for_status()
        # Decoding and resampling are CPU-bound.
        return await asyncio.to_thread(decode_artwork, response.content, self._size)

    def _http(self) -> ResilientClient:
        if self._client is None:
            self._client = self._client_factory(self._resilience)
        return self._client
