"""Spotify duration adapter."""

from __future__ import annotations

from .client import SpotifyClient, build_track_query
from .provider import SpotifyDurationProvider
from .schema import SpotifySearchResponse, SpotifyTrack

__all__ = [
    "SpotifyClient",
    "SpotifyDurationProvider",
    "SpotifySearchResponse",
    "SpotifyTrack",
    "build_track_query",
]
