from __future__ import annotations

import asyncio

import httpx

from timecollage.adapters.http_resilience import (
    ResilientClient,
    _build_cache_components,  # pyright: ignore[reportPrivateUsage]
    _ShouldCacheResponseFilter,  # pyright: ignore[reportPrivateUsage]
    build_retry,
)
from timecollage.config.http_resilience import CacheConfig, ResilienceConfig, RetryPolicy


def test_build_retry_copies_policy() -> None:
    retry = build_retry(RetryPolicy(total=5))

    assert retry.total == 5


def test_disabled_cache_builds_no_storage() -> None:
    assert _build_cache_components(CacheConfig(enabled=False)) == (None, None)
    assert _build_cache_components(None) == (None, None)


def test_should_cache_filter_delegates_to_predicate() -> None:
    response_filter = _ShouldCacheResponseFilter(lambda payload: payload == {"media": [1]})

    assert response_filter.needs_body()
    assert response_filter.apply(None, b'{"media": [1]}')  # type: ignore[arg-type]
    assert not response_filter.apply(None, b'{"media": []}')  # type: ignore[arg-type]
    assert response_filter.apply(None, b"not json")  # type: ignore[arg-type]


def test_client_applies_default_headers_and_base_url() -> None:
    seen: list[httpx.Request] = []

    async def scenario() -> int:
        config = ResilienceConfig(
            name="test",
            base_url="https://example.test/api/",
            cache=CacheConfig(enabled=False),
            default_headers={"User-Agent": "timecollage-test"},
        )
        async with ResilientClient(config) as client:
            # swap in a mock transport while keeping the configured defaults
            client._client._transport = httpx.MockTransport(  # noqa: SLF001  # type: ignore[reportPrivateUsage]
                lambda request: seen.append(request) or httpx.Response(204)
            )
            response = await client.get("ping")
        return response.status_code

    assert asyncio.run(scenario()) == 204
    assert str(seen[0].url) == "https://example.test/api/ping"
    assert seen[0].headers["User-Agent"] == "timecollage-test"
