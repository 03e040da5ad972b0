from __future__ import annotations

import asyncio
from io import BytesIO

import httpx
import pytest
from PIL import Image

from tests.support.http import make_client_factory
from timecollage.config.http_resilience import CacheConfig, ResilienceConfig
from timecollage.rendering.artwork import ArtworkFetcher, decode_artwork

COVER_URL = "https://lastfm.freetls.fastly.net/i/u/300x300/cover.png"


def _png(size: tuple[int, int], color: tuple[int, int, int]) -> bytes:
    buffer = BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


def _resilience() -> ResilienceConfig:
    return ResilienceConfig(name="artwork", cache=CacheConfig(enabled=False))


def test_decode_artwork_crops_to_square() -> None:
    art = decode_artwork(_png((120, 60), (10, 200, 30)), 40)

    assert art.size == (40, 40)
    assert art.mode == "RGB"
    assert art.getpixel((20, 20)) == (10, 200, 30)


def test_fetcher_downloads_and_scales_cover() -> None:
    requests: list[httpx.Request] = []
    payload = _png((64, 64), (255, 0, 0))

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=payload, headers={"Content-Type": "image/png"})

    fetcher = ArtworkFetcher(
        size=32,
        resilience=_resilience(),
        client_factory=make_client_factory(handler, requests=requests),
    )

    async def run() -> Image.Image:
        try:
            return await fetcher.fetch(COVER_URL)
        finally:
            await fetcher.aclose()

    art = asyncio.run(run())

    assert art.size == (32, 32)
    assert art.getpixel((0, 0)) == (255, 0, 0)
    assert [str(request.url) for request in requests] == [COVER_URL]


def test_fetcher_raises_for_missing_cover() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, request=request)

    fetcher = ArtworkFetcher(
        size=32, resilience=_resilience(), client_factory=make_client_factory(handler)
    )

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(fetcher.fetch(COVER_URL))
