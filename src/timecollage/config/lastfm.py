"""Last.fm configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import require_env_vars
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig
from .ratelimit import get_rate_limit

LASTFM_BASE_URL = "https://ws.audioscrobbler.com/2.0/"
LASTFM_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True)
class LastFmConfig:
    """Holds Last.fm API configuration values."""

    api_key: str
    resilience: ResilienceConfig
    ratelimit: RateLimit


def default_lastfm_resilience() -> ResilienceConfig:
    return ResilienceConfig(
        name="lastfm",
        base_url=LASTFM_BASE_URL,
        timeout_seconds=LASTFM_TIMEOUT_SECONDS,
        cache=CacheConfig(backend="memory"),
    )


def get_lastfm_config(*, resilience: ResilienceConfig | None = None) -> LastFmConfig:
    values = require_env_vars(("LASTFM_API_KEY",))
    return LastFmConfig(
        api_key=values["LASTFM_API_KEY"],
        resilience=resilience or default_lastfm_resilience(),
        ratelimit=get_rate_limit("lastfm"),
    )
