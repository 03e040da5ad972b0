"""Last.fm ``track.getInfo`` duration lookups."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from .client import TRACK_NOT_FOUND, LastFmAPIError

if TYPE_CHECKING:
    from timecollage.domain.model import Track

    from .schema import TrackInfo


class TrackInfoClient(Protocol):
    async def track_info(self, *, artist: str, title: str) -> TrackInfo: ...


class LastFmDurationProvider:
    name = "lastfm"
    requires_album_id = False

    def __init__(self, client: TrackInfoClient) -> None:
        self._client = client

    async def lookup(self, track: Track) -> int | None:
        try:
            info = await self._client.track_info(artist=track.artist, title=track.title)
        except LastFmAPIError as exc:
            if exc.code == TRACK_NOT_FOUND:
                return None
            raise
        return info.duration_ms or None
