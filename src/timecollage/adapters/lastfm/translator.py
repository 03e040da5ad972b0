"""Translate Last.fm payloads into domain tracks."""

from __future__ import annotations

from timecollage.domain.model import Album, Track

from .schema import TrackPayload, TrackPayloadInput

UNKNOWN_ARTIST = "Unknown Artist"
UNKNOWN_ALBUM = "Unknown Album"


def _ensure_track_payload(scrobble: TrackPayloadInput) -> TrackPayload:
    if isinstance(scrobble, TrackPayload):
        return scrobble
    return TrackPayload.model_validate(scrobble)


def _cover_url(payload: TrackPayload) -> str | None:
    # Last.fm lists images from smallest to largest.
    if not payload.image:
        return None
    return payload.image[-1].url or None


def parse_track(scrobble: TrackPayloadInput) -> Track:
    payload = _ensure_track_payload(scrobble)
    artist_name = payload.artist.name or UNKNOWN_ARTIST
    album = Album(
        title=payload.album.title or UNKNOWN_ALBUM,
        artist=artist_name,
        cover_url=_cover_url(payload),
        mbid=payload.album.mbid,
    )
    return Track(
        title=payload.name,
        artist=artist_name,
        album=album,
        mbid=payload.mbid,
    )
