"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field, replace
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, Self

from timecollage.adapters.bandcamp import BandcampClient, BandcampDurationProvider
from timecollage.adapters.lastfm import (
    LastFmClient,
    LastFmDurationProvider,
    LastFmHistorySource,
    lastfm_resilience,
)
from timecollage.adapters.musicbrainz import (
    MusicBrainzClient,
    MusicBrainzDurationProvider,
    release_has_media,
)
from timecollage.adapters.spotify import SpotifyClient, SpotifyDurationProvider
from timecollage.common.cache import JsonFileCache
from timecollage.common.ratelimit import RateLimiter
from timecollage.config import (
    artwork_resilience,
    get_bandcamp_config,
    get_collage_config,
    get_lastfm_config,
    get_matching_config,
    get_musicbrainz_config,
    get_spotify_config,
    get_storage_config,
)
from timecollage.domain.aggregation import AggregationConfig, aggregate
from timecollage.domain.model import Track
from timecollage.domain.resolution import DurationResolver, duration_cache_key
from timecollage.domain.time_windows import TimeWindow
from timecollage.rendering import ArtworkFetcher, CollageRenderer, output_format_for

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence
    from types import TracebackType

    from timecollage.domain.model import ActivitySummary
    from timecollage.domain.ports import HistorySource
    from timecollage.domain.time_windows import Clock

log = getLogger(__name__)


class PersistentStore(Protocol):
    def save(self) -> None: ...


class SummaryRenderer(Protocol):
    async def render(
        self, output_path: Path | str, summary: ActivitySummary
    ) -> ActivitySummary: ...


@dataclass(frozen=True, slots=True)
class CollageRequest:
    user: str
    output_path: Path
    window: TimeWindow = field(default_factory=TimeWindow)
    show_labels: bool | None = None


@dataclass(frozen=True, slots=True)
class CollageResult:
    summary: ActivitySummary
    output_path: Path


@dataclass(slots=True)
class CollageServices:
    """Everything one collage run needs; closes its HTTP clients on exit."""

    history: HistorySource
    resolver: DurationResolver
    cache: PersistentStore
    renderer: SummaryRenderer
    aggregation: AggregationConfig = field(default_factory=AggregationConfig)
    closers: Sequence[Callable[[], Awaitable[None]]] = ()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        for close in self.closers:
            await close()


def build_services(*, show_labels: bool | None = None) -> CollageServices:
    """Wire the production adapters from environment configuration."""

    storage = get_storage_config()
    matching = get_matching_config()
    collage = get_collage_config()
    if show_labels is not None:
        collage = replace(collage, show_labels=show_labels)
    http_cache = str(storage.http_cache_path())

    lastfm_config = get_lastfm_config(resilience=lastfm_resilience())
    musicbrainz_config = get_musicbrainz_config(
        sqlite_path=http_cache, cache_predicate=release_has_media
    )
    spotify_config = get_spotify_config()
    bandcamp_config = get_bandcamp_config()

    rate_limiter = RateLimiter(
        {
            "musicbrainz": musicbrainz_config.ratelimit,
            "lastfm": lastfm_config.ratelimit,
            "lastfm-history": lastfm_config.ratelimit,
            "spotify": spotify_config.ratelimit,
            "bandcamp": bandcamp_config.ratelimit,
        }
    )
    cache = JsonFileCache[Track, int](
        storage.duration_cache_path(), key_translate=duration_cache_key
    )

    lastfm_client = LastFmClient(config=lastfm_config)
    musicbrainz_client = MusicBrainzClient(config=musicbrainz_config)
    bandcamp_client = BandcampClient(config=bandcamp_config)
    artwork = ArtworkFetcher(
        size=collage.art_size, resilience=artwork_resilience(sqlite_path=http_cache)
    )

    threshold = matching.title_similarity_threshold
    resolver = DurationResolver(
        cache=cache,
        providers=(
            MusicBrainzDurationProvider(musicbrainz_client, title_threshold=threshold),
            LastFmDurationProvider(lastfm_client),
            SpotifyDurationProvider(
                SpotifyClient(config=spotify_config), title_threshold=threshold
            ),
            BandcampDurationProvider(bandcamp_client, title_threshold=threshold),
        ),
        rate_limiter=rate_limiter,
        provider_timeout=matching.provider_timeout_seconds,
    )

    return CollageServices(
        history=LastFmHistorySource(lastfm_client, scheduler=rate_limiter),
        resolver=resolver,
        cache=cache,
        renderer=CollageRenderer(artwork=artwork, config=collage),
        aggregation=AggregationConfig(
            artist_similarity_threshold=matching.artist_similarity_threshold
        ),
        closers=(
            lastfm_client.aclose,
            musicbrainz_client.aclose,
            bandcamp_client.aclose,
            artwork.aclose,
        ),
    )


async def generate_collage_async(
    request: CollageRequest,
    services: CollageServices,
    *,
    clock: Clock | None = None,
) -> CollageResult:
    """Fetch history, resolve durations, aggregate and render one collage.

    The duration cache is saved whether or not the run succeeds.
    """

    output_format_for(request.output_path)
    start, end = request.window.resolve(clock=clock) if clock else request.window.resolve()
    log.info(
        "Generating collage for %s: from=%s, to=%s, output=%s",
        request.user,
        start.isoformat(),
        end.isoformat(),
        request.output_path,
    )

    try:
        resolved = await services.resolver.resolve_pages(
            services.history.pages(request.user, start, end)
        )
        summary = aggregate(
            request.user,
            start,
            end,
            resolved.tracks,
            config=services.aggregation,
            diagnostics=resolved.diagnostics,
        )
        await services.renderer.render(request.output_path, summary)
    finally:
        services.cache.save()

    log.info(
        f"Finished collage for {request.user}: albums={len(summary.albums)}, "
        f"tracks={len(resolved.tracks)}, messages={len(summary.messages)}"
    )
    return CollageResult(summary=summary, output_path=Path(request.output_path))


def generate_collage(
    request: CollageRequest,
    services: CollageServices | None = None,
    *,
    services_factory: Callable[..., CollageServices] = build_services,
) -> CollageResult:
    """Synchronous entry point around :func:`generate_collage_async`."""

    async def run() -> CollageResult:
        async with services or services_factory(show_labels=request.show_labels) as active:
            return await generate_collage_async(request, active)

    return asyncio.run(run())
