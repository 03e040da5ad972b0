"""Listening history read from Last.fm's recent tracks."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Protocol

from .client import DEFAULT_BATCH_SIZE, datetime_to_epoch_seconds
from .translator import parse_track

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Sequence
    from datetime import datetime

    from timecollage.domain.model import Track
    from timecollage.domain.resolution import CallScheduler

    from .schema import ResponseAttr, TrackPayload

log = getLogger(__name__)


class RecentTracksClient(Protocol):
    async def recent_tracks(
        self,
        *,
        user: str,
        page: int,
        limit: int = DEFAULT_BATCH_SIZE,
        from_ts: int | None = None,
        to_ts: int | None = None,
        extended: bool = True,
    ) -> tuple[list[TrackPayload], ResponseAttr]: ...


class LastFmHistorySource:
    """Pages through ``user.getrecenttracks``, skipping the now-playing entry.

    Page fetches use their own throttle key so they never queue behind the
    ``track.getInfo`` lookups issued for earlier pages.
    """

    provider_key = "lastfm-history"

    def __init__(
        self,
        client: RecentTracksClient,
        *,
        batch_size: int = DEFAULT_BATCH_SIZE,
        scheduler: CallScheduler | None = None,
    ) -> None:
        self._client = client
        self._batch_size = batch_size
        self._scheduler = scheduler

    async def pages(
        self,
        user: str,
        start: datetime,
        end: datetime,
    ) -> AsyncIterator[Sequence[Track]]:
        from_ts = datetime_to_epoch_seconds(start)
        to_ts = datetime_to_epoch_seconds(end)
        page = 1

        while True:
            payloads, attrs = await self._fetch(user, page, from_ts, to_ts)
            tracks = [parse_track(payload) for payload in payloads if not payload.is_now_playing]
            log.debug(
                "Fetched page %d/%d for %s (%d tracks)", page, attrs.total_pages, user, len(tracks)
            )
            if tracks:
                yield tracks
            if page >= attrs.total_pages:
                break
            page += 1

    async def _fetch(
        self, user: str, page: int, from_ts: int, to_ts: int
    ) -> tuple[list[TrackPayload], ResponseAttr]:
        async def call() -> tuple[list[TrackPayload], ResponseAttr]:
            return await self._client.recent_tracks(
                user=user,
                page=page,
                limit=self._batch_size,
                from_ts=from_ts,
                to_ts=to_ts,
            )

        if self._scheduler is None:
            return await call()
        return await self._scheduler.schedule(self.provider_key, call)
