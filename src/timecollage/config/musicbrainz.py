"""MusicBrainz configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from timecollage import __version__

from .env import optional_env_var
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, ShouldCacheHook
from .ratelimit import get_rate_limit

DEFAULT_MUSICBRAINZ_BASE_URL = "https://musicbrainz.org/ws/2/"
DEFAULT_MUSICBRAINZ_APP_NAME = "timecollage"


@dataclass(frozen=True, slots=True)
class MusicBrainzConfig:
    resilience: ResilienceConfig
    ratelimit: RateLimit


def musicbrainz_user_agent(app_name: str, contact: str | None) -> str:
    if contact:
        return f"{app_name}/{__version__} ( {contact} )"
    return f"{app_name}/{__version__}"


def get_musicbrainz_config(
    *,
    sqlite_path: str | None = None,
    cache_predicate: ShouldCacheHook | None = None,
) -> MusicBrainzConfig:
    app_name = optional_env_var("MUSICBRAINZ_APP_NAME") or DEFAULT_MUSICBRAINZ_APP_NAME
    contact = optional_env_var("MUSICBRAINZ_CONTACT")

    resilience = ResilienceConfig(
        name="musicbrainz",
        base_url=DEFAULT_MUSICBRAINZ_BASE_URL,
        cache=CacheConfig(
            enabled=True,
            backend="sqlite",
            sqlite_path=sqlite_path,
            should_cache=cache_predicate,
        ),
        default_headers={"User-Agent": musicbrainz_user_agent(app_name, contact)},
    )

    return MusicBrainzConfig(resilience=resilience, ratelimit=get_rate_limit("musicbrainz"))
