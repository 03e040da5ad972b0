"""MusicBrainz duration adapter."""

from __future__ import annotations

from .client import MusicBrainzAPIError, MusicBrainzClient
from .provider import MusicBrainzDurationProvider
from .schema import MusicBrainzRelease, MusicBrainzTrack, release_has_media

__all__ = [
    "MusicBrainzAPIError",
    "MusicBrainzClient",
    "MusicBrainzDurationProvider",
    "MusicBrainzRelease",
    "MusicBrainzTrack",
    "release_has_media",
]
