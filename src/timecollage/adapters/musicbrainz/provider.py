"""MusicBrainz-backed duration lookups keyed by the album's release id."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Protocol

from timecollage.config.matching import DEFAULT_TITLE_SIMILARITY_THRESHOLD
from timecollage.domain.matching import choose_candidate

from .client import MusicBrainzAPIError

if TYPE_CHECKING:
    from timecollage.domain.model import Track

    from .schema import MusicBrainzRelease, MusicBrainzTrack

log = getLogger(__name__)


class ReleaseLookupClient(Protocol):
    async def fetch_release(
        self, *, mbid: str, inc: tuple[str, ...] | None = None
    ) -> MusicBrainzRelease: ...


def _track_ids(candidate: MusicBrainzTrack) -> tuple[str | None, ...]:
    return (candidate.id, candidate.recording_id)


class MusicBrainzDurationProvider:
    name = "musicbrainz"
    requires_album_id = True

    def __init__(
        self,
        client: ReleaseLookupClient,
        *,
        title_threshold: float = DEFAULT_TITLE_SIMILARITY_THRESHOLD,
    ) -> None:
        self._client = client
        self._title_threshold = title_threshold

    async def lookup(self, track: Track) -> int | None:
        mbid = (track.album.mbid or "").strip()
        if not mbid:
            raise ValueError("Variable [track.album.mbid] cannot be blank.")

        release = await self._client.fetch_release(mbid=mbid)
        candidates = release.tracks
        if not candidates:
            raise MusicBrainzAPIError(f"Release [{mbid}] has no media")

        match = choose_candidate(
            track.title,
            candidates,
            title_of=lambda candidate: candidate.title,
            ids_of=_track_ids,
            wanted_id=track.mbid,
            threshold=self._title_threshold,
            context=f"MusicBrainz release {mbid}",
        )
        if match is None:
            log.info(
                "MusicBrainz release [%s] has no track matching '%s'", release.title, track.title
            )
            return None
        return match.duration_ms
