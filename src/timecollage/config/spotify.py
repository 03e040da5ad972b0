"""Spotify configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import require_env_vars
from .http_resilience import RateLimit
from .ratelimit import get_rate_limit

DEFAULT_SEARCH_LIMIT = 10


@dataclass(frozen=True)
class SpotifyConfig:
    client_id: str
    client_secret: str
    ratelimit: RateLimit
    search_limit: int = DEFAULT_SEARCH_LIMIT


def get_spotify_config() -> SpotifyConfig:
    values = require_env_vars(("SPOTIFY_CLIENT_ID", "SPOTIFY_CLIENT_SECRET"))
    return SpotifyConfig(
        client_id=values["SPOTIFY_CLIENT_ID"],
        client_secret=values["SPOTIFY_CLIENT_SECRET"],
        ratelimit=get_rate_limit("spotify"),
    )
