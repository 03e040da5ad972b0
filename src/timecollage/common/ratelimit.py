"""Per-provider call throttling.

Every provider key owns an independent throttle, so a slow provider cannot eat
another provider's budget. Calls queue in arrival order behind a fair lock and are
released by an ``aiolimiter`` bucket; nothing is dropped.
"""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from aiolimiter import AsyncLimiter

from timecollage.config.http_resilience import DEFAULT_RATE_LIMIT, RateLimit

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Mapping

log = getLogger(__name__)


class ProviderThrottle:
    def __init__(self, name: str, limit: RateLimit) -> None:
        self.name = name
        self.limit = limit
        self._limiter = AsyncLimiter(limit.max_calls, limit.per_seconds)
        self._queue = asyncio.Lock()
        self._waiting = 0

    @property
    def waiting(self) -> int:
        return self._waiting

    async def run[T](self, fn: Callable[[], Awaitable[T]]) -> T:
        self._waiting += 1
        try:
            async with self._queue:
                await self._limiter.acquire()
        finally:
            self._waiting -= 1
        return await fn()


class RateLimiter:
    """Registry of provider throttles keyed by provider name."""

    def __init__(
        self,
        limits: Mapping[str, RateLimit] | None = None,
        *,
        default: RateLimit = DEFAULT_RATE_LIMIT,
    ) -> None:
        self._limits = dict(limits or {})
        self._default = default
        self._throttles: dict[str, ProviderThrottle] = {}

    def throttle(self, provider_key: str) -> ProviderThrottle:
        throttle = self._throttles.get(provider_key)
        if throttle is None:
            limit = self._limits.get(provider_key, self._default)
            log.debug(
                "Creating throttle for %s: %s calls per %ss",
                provider_key,
                limit.max_calls,
                limit.per_seconds,
            )
            throttle = ProviderThrottle(provider_key, limit)
            self._throttles[provider_key] = throttle
        return throttle

    async def schedule[T](self, provider_key: str, fn: Callable[[], Awaitable[T]]) -> T:
        return await self.throttle(provider_key).run(fn)
