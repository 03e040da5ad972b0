"""Spotipy-based client wrapper for Spotify track search."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import spotipy
from spotipy.oauth2 import SpotifyClientCredentials

from .schema import SpotifySearchResponse, SpotifyTrack

if TYPE_CHECKING:
    from timecollage.config.spotify import SpotifyConfig


def _quote(value: str) -> str:
    return value.replace('"', " ").strip()


def build_track_query(*, title: str, artist: str, album: str | None = None) -> str:
    """Field-filtered search query, e.g. ``track:"x" artist:"y" album:"z"``."""

    parts = [f'track:"{_quote(title)}"', f'artist:"{_quote(artist)}"']
    if album:
        parts.append(f'album:"{_quote(album)}"')
    return " ".join(parts)


class SpotifyClient:
    """Small wrapper around spotipy.Spotify using app-only credentials."""

    def __init__(self, *, config: SpotifyConfig, client: spotipy.Spotify | None = None) -> None:
        if client is None:
            auth_manager = SpotifyClientCredentials(
                client_id=config.client_id,
                client_secret=config.client_secret,
            )
            client = spotipy.Spotify(auth_manager=auth_manager, retries=0)
        self._client = client
        self._search_limit = config.search_limit

    def search_tracks_sync(self, query: str) -> list[SpotifyTrack]:
        raw_payload = self._client.search(q=query, type="track", limit=self._search_limit)  # pyright: ignore[reportUnknownMemberType]
        return SpotifySearchResponse.model_validate(raw_payload).tracks.items

    async def search_tracks(self, query: str) -> list[SpotifyTrack]:
        # spotipy is blocking; keep it off the event loop.
        return await asyncio.to_thread(self.search_tracks_sync, query)
