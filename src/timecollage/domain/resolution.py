"""Duration resolution through a cached, rate-limited provider fallback chain."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Protocol

from .model import is_valid_duration

if TYPE_CHECKING:
    from collections.abc import (
        AsyncIterable,
        AsyncIterator,
        Awaitable,
        Callable,
        Iterable,
        Sequence,
    )

    from .model import Track
    from .ports import DurationProvider

log = getLogger(__name__)


class DurationStore(Protocol):
    def key_for(self, raw_key: Track) -> str: ...

    def get(self, raw_key: Track, *, renew: bool = True) -> object | None: ...

    def set(self, raw_key: Track, value: int) -> None: ...


class CallScheduler(Protocol):
    async def schedule[T](self, provider_key: str, fn: Callable[[], Awaitable[T]]) -> T: ...


def duration_cache_key(track: Track) -> str:
    return f"{track.artist}.{track.album.title}.{track.title}".lower()


def not_found_message(track: Track) -> str:
    return f"{track.describe()} song length not found."


@dataclass(slots=True)
class ResolvedTracks:
    tracks: list[Track] = field(default_factory=list)
    diagnostics: list[str] = field(default_factory=list)


class DurationResolver:
    """Fill in ``Track.duration_ms`` from the cache or the first provider that knows it.

    Provider failures never escape :meth:`resolve`; an unresolved track simply keeps
    ``None``. Concurrent resolutions of the same cache key share one provider chain.
    """

    def __init__(
        self,
        *,
        cache: DurationStore,
        providers: Sequence[DurationProvider],
        rate_limiter: CallScheduler,
        provider_timeout: float | None = None,
    ) -> None:
        self._cache = cache
        self._providers = tuple(providers)
        self._rate_limiter = rate_limiter
        self._provider_timeout = provider_timeout
        self._inflight: dict[str, asyncio.Task[int | None]] = {}

    @property
    def providers(self) -> tuple[DurationProvider, ...]:
        return self._providers

    async def resolve(self, track: Track, *, diagnostics: list[str] | None = None) -> int | None:
        cached = self._cache.get(track)
        if is_valid_duration(cached):
            track.duration_ms = int(cached)  # pyright: ignore[reportArgumentType]
            log.debug("Cache hit for '%s' by '%s'", track.title, track.artist)
            return track.duration_ms

        key = self._cache.key_for(track)
        pending = self._inflight.get(key)
        if pending is None:
            pending = asyncio.create_task(self._run_chain(track), name=f"resolve:{key}")
            self._inflight[key] = pending
            try:
                duration = await pending
            finally:
                self._inflight.pop(key, None)
        else:
            duration = await pending

        if duration is None:
            if diagnostics is not None:
                diagnostics.append(not_found_message(track))
            return None
        track.duration_ms = duration
        return duration

    async def resolve_all(self, tracks: Iterable[Track]) -> ResolvedTracks:
        async def single_page() -> AsyncIterator[Sequence[Track]]:
            yield list(tracks)

        return await self.resolve_pages(single_page())

    async def resolve_pages(self, pages: AsyncIterable[Sequence[Track]]) -> ResolvedTracks:
        """Resolve every track as its page arrives, then wait for all of them."""

        result = ResolvedTracks()
        scheduled: list[tuple[Track, asyncio.Task[int | None]]] = []
        try:
            async for page in pages:
                for track in page:
                    task = asyncio.create_task(
                        self.resolve(track, diagnostics=result.diagnostics)
                    )
                    scheduled.append((track, task))
        except BaseException:
            for _, task in scheduled:
                task.cancel()
            raise

        log.info("Resolving durations for %d tracks", len(scheduled))
        outcomes = await asyncio.gather(*(task for _, task in scheduled), return_exceptions=True)
        for (track, _), outcome in zip(scheduled, outcomes, strict=True):
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, Exception):
                    raise outcome
                log.error(
                    "Error occurred processing track '%s' by %s, dropping it",
                    track.title,
                    track.artist,
                    exc_info=outcome,
                )
                continue
            result.tracks.append(track)
        return result

    async def _run_chain(self, track: Track) -> int | None:
        for provider in self._providers:
            if provider.requires_album_id and not track.album.has_external_id:
                log.debug(
                    "Skipping %s for '%s': album has no external id", provider.name, track.title
                )
                continue
            duration = await self._try_provider(provider, track)
            if duration is not None:
                log.debug(
                    "%s found %dms for '%s' by %s",
                    provider.name,
                    duration,
                    track.title,
                    track.artist,
                )
                self._cache.set(track, duration)
                return duration

        log.error("No track duration found for track '%s' by %s", track.title, track.artist)
        return None

    async def _try_provider(self, provider: DurationProvider, track: Track) -> int | None:
        async def call() -> int | None:
            if self._provider_timeout is None:
                return await provider.lookup(track)
            async with asyncio.timeout(self._provider_timeout):
                return await provider.lookup(track)

        try:
            raw = await self._rate_limiter.schedule(provider.name, call)
        except Exception as exc:  # noqa: BLE001
            log.warning(
                "%s lookup failed for '%s' by %s: %s",
                provider.name,
                track.title,
                track.artist,
                str(exc) or type(exc).__name__,
            )
            return None

        if not is_valid_duration(raw):
            return None
        return int(raw)  # pyright: ignore[reportArgumentType]
