"""Application configuration helpers."""

from __future__ import annotations

from .bandcamp import BandcampConfig, get_bandcamp_config
from .collage import CollageConfig, artwork_resilience, get_collage_config
from .env import env_bool, env_float, optional_env_var, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError, UnsupportedOutputFormatError
from .http_resilience import (
    DEFAULT_RATE_LIMIT,
    CacheConfig,
    RateLimit,
    ResilienceConfig,
    RetryPolicy,
)
from .lastfm import LastFmConfig, get_lastfm_config
from .logging import configure_logging
from .matching import MatchingConfig, get_matching_config
from .musicbrainz import MusicBrainzConfig, get_musicbrainz_config
from .ratelimit import get_rate_limit
from .spotify import SpotifyConfig, get_spotify_config
from .storage import StorageConfig, get_storage_config

__all__ = [
    "DEFAULT_RATE_LIMIT",
    "BandcampConfig",
    "CacheConfig",
    "CollageConfig",
    "ConfigurationError",
    "LastFmConfig",
    "MatchingConfig",
    "MissingConfigurationError",
    "MusicBrainzConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "SpotifyConfig",
    "StorageConfig",
    "UnsupportedOutputFormatError",
    "artwork_resilience",
    "configure_logging",
    "env_bool",
    "env_float",
    "get_bandcamp_config",
    "get_collage_config",
    "get_lastfm_config",
    "get_matching_config",
    "get_musicbrainz_config",
    "get_rate_limit",
    "get_spotify_config",
    "get_storage_config",
    "optional_env_var",
    "require_env_var",
    "require_env_vars",
]
