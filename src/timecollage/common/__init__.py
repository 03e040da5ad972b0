from __future__ import annotations

from .cache import DEFAULT_EXPIRATION_MS, CacheEntry, JsonFileCache
from .ratelimit import ProviderThrottle, RateLimiter
from .text import format_duration, trim_text

__all__ = [
    "DEFAULT_EXPIRATION_MS",
    "CacheEntry",
    "JsonFileCache",
    "ProviderThrottle",
    "RateLimiter",
    "format_duration",
    "trim_text",
]
