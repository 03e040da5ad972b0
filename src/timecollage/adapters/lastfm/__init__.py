"""Last.fm adapter: listening history and ``track.getInfo`` durations."""

from __future__ import annotations

from .client import LastFmAPIError, LastFmClient, lastfm_resilience
from .history import LastFmHistorySource
from .provider import LastFmDurationProvider
from .translator import UNKNOWN_ALBUM, UNKNOWN_ARTIST, parse_track

__all__ = [
    "UNKNOWN_ALBUM",
    "UNKNOWN_ARTIST",
    "LastFmAPIError",
    "LastFmClient",
    "LastFmDurationProvider",
    "LastFmHistorySource",
    "lastfm_resilience",
    "parse_track",
]
