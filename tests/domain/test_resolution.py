from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import pytest

from tests.support.tracks import FakeDurationStore, FakeProvider, ImmediateScheduler, make_track
from timecollage.domain.ports import DurationProvider
from timecollage.domain.resolution import DurationResolver, duration_cache_key, not_found_message

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Sequence

    from timecollage.domain.model import Track


def _resolver(
    providers: Sequence[DurationProvider],
    *,
    cache: FakeDurationStore | None = None,
    scheduler: ImmediateScheduler | None = None,
    provider_timeout: float | None = None,
) -> DurationResolver:
    return DurationResolver(
        cache=cache or FakeDurationStore(),
        providers=providers,
        rate_limiter=scheduler or ImmediateScheduler(),
        provider_timeout=provider_timeout,
    )


def test_cache_key_is_lowercased_artist_album_title() -> None:
    track = make_track("Airbag", "Radiohead", "OK Computer")

    assert duration_cache_key(track) == "radiohead.ok computer.airbag"
    assert not_found_message(track) == "Radiohead - Airbag song length not found."


def test_fake_provider_satisfies_protocol() -> None:
    assert isinstance(FakeProvider("x"), DurationProvider)


def test_cache_hit_skips_every_provider() -> None:
    track = make_track("Airbag", "Radiohead", "OK Computer", album_mbid="mbid")
    cache = FakeDurationStore({duration_cache_key(track): 284_000})
    provider = FakeProvider("lastfm", default=1)

    duration = asyncio.run(_resolver([provider], cache=cache).resolve(track))

    assert duration == 284_000
    assert track.duration_ms == 284_000
    assert provider.calls == []
    assert cache.writes == []


def test_invalid_cached_values_are_ignored() -> None:
    track = make_track()
    cache = FakeDurationStore({duration_cache_key(track): "soon"})
    provider = FakeProvider("lastfm", default=200_000)

    assert asyncio.run(_resolver([provider], cache=cache).resolve(track)) == 200_000
    assert provider.calls == ["Song"]


def test_first_positive_duration_wins_and_is_cached() -> None:
    track = make_track(album_mbid="release-id")
    first = FakeProvider("musicbrainz", default=None, requires_album_id=True)
    second = FakeProvider("lastfm", default=180_000)
    third = FakeProvider("spotify", default=999)
    cache = FakeDurationStore()
    scheduler = ImmediateScheduler()

    duration = asyncio.run(
        _resolver([first, second, third], cache=cache, scheduler=scheduler).resolve(track)
    )

    assert duration == 180_000
    assert track.duration_ms == 180_000
    assert first.calls == ["Song"]
    assert second.calls == ["Song"]
    assert third.calls == []
    assert cache.writes == [(duration_cache_key(track), 180_000)]
    assert scheduler.keys == ["musicbrainz", "lastfm"]


def test_providers_needing_album_id_are_skipped_without_one() -> None:
    track = make_track(album_mbid=None)
    musicbrainz = FakeProvider("musicbrainz", default=1_000, requires_album_id=True)
    lastfm = FakeProvider("lastfm", default=2_000)

    assert asyncio.run(_resolver([musicbrainz, lastfm]).resolve(track)) == 2_000
    assert musicbrainz.calls == []


@pytest.mark.parametrize("bad", [0, -5, 12.5, True, "300"])
def test_non_positive_or_non_integer_results_fall_through(bad: object) -> None:
    track = make_track()
    odd = FakeProvider("odd", default=bad)  # type: ignore[arg-type]
    good = FakeProvider("good", default=5_000)

    assert asyncio.run(_resolver([odd, good]).resolve(track)) == 5_000


def test_provider_errors_are_logged_and_skipped(caplog: pytest.LogCaptureFixture) -> None:
    track = make_track("Airbag", "Radiohead")
    failing = FakeProvider("musicbrainz", default=RuntimeError("HTTP 503"))
    good = FakeProvider("lastfm", default=284_000)

    with caplog.at_level("WARNING"):
        duration = asyncio.run(_resolver([failing, good]).resolve(track))

    assert duration == 284_000
    assert "musicbrainz lookup failed for 'Airbag' by Radiohead: HTTP 503" in caplog.text


def test_exhausted_chain_returns_none_and_records_diagnostic(
    caplog: pytest.LogCaptureFixture,
) -> None:
    track = make_track("Airbag", "Radiohead")
    providers = [
        FakeProvider("lastfm", default=None),
        FakeProvider("spotify", default=ValueError()),
    ]
    cache = FakeDurationStore()
    diagnostics: list[str] = []

    with caplog.at_level("ERROR"):
        duration = asyncio.run(
            _resolver(providers, cache=cache).resolve(track, diagnostics=diagnostics)
        )

    assert duration is None
    assert track.duration_ms is None
    assert cache.writes == []
    assert diagnostics == ["Radiohead - Airbag song length not found."]
    assert "No track duration found for track 'Airbag' by Radiohead" in caplog.text


def test_provider_timeout_counts_as_failure() -> None:
    class SlowProvider:
        name = "slow"
        requires_album_id = False

        async def lookup(self, track: Track) -> int | None:  # noqa: ARG002
            await asyncio.sleep(5)
            return 1

    fallback = FakeProvider("fallback", default=42_000)
    resolver = _resolver([SlowProvider(), fallback], provider_timeout=0.01)

    assert asyncio.run(resolver.resolve(make_track())) == 42_000


def test_concurrent_resolutions_of_one_key_share_the_chain() -> None:
    class CountingProvider:
        name = "counting"
        requires_album_id = False

        def __init__(self) -> None:
            self.calls = 0

        async def lookup(self, track: Track) -> int | None:  # noqa: ARG002
            self.calls += 1
            await asyncio.sleep(0.01)
            return 123_000

    provider = CountingProvider()
    resolver = _resolver([provider])
    first = make_track("Same", "Artist", "Album")
    second = make_track("SAME", "artist", "album")

    async def scenario() -> list[int | None]:
        return list(await asyncio.gather(resolver.resolve(first), resolver.resolve(second)))

    assert asyncio.run(scenario()) == [123_000, 123_000]
    assert provider.calls == 1
    assert second.duration_ms == 123_000


def test_resolve_all_keeps_every_track_and_collects_diagnostics() -> None:
    tracks = [make_track("Known"), make_track("Unknown")]
    provider = FakeProvider("lastfm", results={"Known": 100_000})

    resolved = asyncio.run(_resolver([provider]).resolve_all(tracks))

    assert resolved.tracks == tracks
    assert [track.duration_ms for track in resolved.tracks] == [100_000, None]
    assert resolved.diagnostics == ["Artist - Unknown song length not found."]


def test_resolve_pages_starts_work_as_pages_arrive() -> None:
    provider = FakeProvider("lastfm", default=1_000)
    resolver = _resolver([provider])
    seen_before_second_page: list[str] = []

    async def pages() -> AsyncIterator[Sequence[Track]]:
        yield [make_track("One"), make_track("Two")]
        await asyncio.sleep(0.01)
        seen_before_second_page.extend(provider.calls)
        yield [make_track("Three")]

    resolved = asyncio.run(resolver.resolve_pages(pages()))

    assert [track.title for track in resolved.tracks] == ["One", "Two", "Three"]
    assert seen_before_second_page == ["One", "Two"]


def test_resolve_pages_propagates_history_errors() -> None:
    resolver = _resolver([FakeProvider("lastfm", default=1_000)])

    async def pages() -> AsyncIterator[Sequence[Track]]:
        yield [make_track("One")]
        raise RuntimeError("history unavailable")

    with pytest.raises(RuntimeError, match="history unavailable"):
        asyncio.run(resolver.resolve_pages(pages()))


def test_tracks_failing_outside_the_chain_are_dropped(caplog: pytest.LogCaptureFixture) -> None:
    class BrokenCache(FakeDurationStore):
        def get(self, raw_key: Track, *, renew: bool = True) -> object | None:
            if raw_key.title == "Broken":
                raise OSError("disk on fire")
            return super().get(raw_key, renew=renew)

    tracks = [make_track("Fine"), make_track("Broken")]
    resolver = _resolver([FakeProvider("lastfm", default=1_000)], cache=BrokenCache())

    with caplog.at_level("ERROR"):
        resolved = asyncio.run(resolver.resolve_all(tracks))

    assert [track.title for track in resolved.tracks] == ["Fine"]
    assert "Error occurred processing track 'Broken'" in caplog.text
