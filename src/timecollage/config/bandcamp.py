"""Bandcamp scraping configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .http_resilience import CacheConfig, RateLimit, ResilienceConfig
from .ratelimit import get_rate_limit

BANDCAMP_BASE_URL = "https://bandcamp.com/"
BANDCAMP_USER_AGENT = "Mozilla/5.0 (X11; Linux x86_64) timecollage"


@dataclass(frozen=True, slots=True)
class BandcampConfig:
    resilience: ResilienceConfig
    ratelimit: RateLimit


def get_bandcamp_config() -> BandcampConfig:
    resilience = ResilienceConfig(
        name="bandcamp",
        base_url=BANDCAMP_BASE_URL,
        timeout_seconds=15.0,
        cache=CacheConfig(enabled=False),
        default_headers={"User-Agent": BANDCAMP_USER_AGENT},
        follow_redirects=True,
    )
    return BandcampConfig(resilience=resilience, ratelimit=get_rate_limit("bandcamp"))
