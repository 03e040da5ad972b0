from __future__ import annotations

import asyncio
import contextlib
import time

from timecollage.common.ratelimit import RateLimiter
from timecollage.config.http_resilience import RateLimit


def test_schedule_returns_result_of_call() -> None:
    limiter = RateLimiter()

    async def call() -> str:
        return "done"

    assert asyncio.run(limiter.schedule("lastfm", call)) == "done"


def test_throttles_are_created_lazily_per_key() -> None:
    limiter = RateLimiter({"spotify": RateLimit(max_calls=5, per_seconds=1.0)})

    spotify = limiter.throttle("spotify")
    bandcamp = limiter.throttle("bandcamp")

    assert limiter.throttle("spotify") is spotify
    assert spotify.limit == RateLimit(max_calls=5, per_seconds=1.0)
    assert bandcamp.limit == RateLimit()


def test_calls_run_in_arrival_order() -> None:
    limiter = RateLimiter(default=RateLimit(max_calls=100, per_seconds=1.0))
    order: list[int] = []

    async def scenario() -> None:
        def make(index: int):  # noqa: ANN202
            async def call() -> int:
                order.append(index)
                return index

            return call

        calls = [limiter.schedule("musicbrainz", make(i)) for i in range(10)]
        results = await asyncio.gather(*calls)
        assert results == list(range(10))

    asyncio.run(scenario())
    assert order == list(range(10))


def test_budget_is_enforced_per_key() -> None:
    limiter = RateLimiter(default=RateLimit(max_calls=2, per_seconds=0.2))

    async def noop() -> None:
        return None

    async def scenario() -> tuple[float, float]:
        started = time.monotonic()
        await asyncio.gather(*(limiter.schedule("a", noop) for _ in range(4)))
        throttled = time.monotonic() - started

        started = time.monotonic()
        await asyncio.gather(*(limiter.schedule("b", noop) for _ in range(2)))
        independent = time.monotonic() - started
        return throttled, independent

    throttled, independent = asyncio.run(scenario())

    assert throttled >= 0.08
    assert independent < 0.08


def test_errors_from_call_propagate_and_do_not_block_queue() -> None:
    limiter = RateLimiter(default=RateLimit(max_calls=10, per_seconds=1.0))

    async def boom() -> None:
        raise RuntimeError("boom")

    async def ok() -> int:
        return 1

    async def scenario() -> int:
        with contextlib.suppress(RuntimeError):
            await limiter.schedule("x", boom)
        return await limiter.schedule("x", ok)

    assert asyncio.run(scenario()) == 1
    assert limiter.throttle("x").waiting == 0
