"""Fuzzy-matching thresholds.

Both thresholds are heuristics carried over from observed behaviour and have not
been tuned against labelled data; keep them overridable.
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_float
from .errors import ConfigurationError

DEFAULT_ARTIST_SIMILARITY_THRESHOLD = 0.8
DEFAULT_TITLE_SIMILARITY_THRESHOLD = 0.6


@dataclass(frozen=True, slots=True)
class MatchingConfig:
    artist_similarity_threshold: float = DEFAULT_ARTIST_SIMILARITY_THRESHOLD
    title_similarity_threshold: float = DEFAULT_TITLE_SIMILARITY_THRESHOLD
    provider_timeout_seconds: float | None = None


def _threshold(name: str, default: float) -> float:
    value = env_float(name, default)
    if value is None or not 0.0 <= value <= 1.0:
        raise ConfigurationError(f"Variable [{name}] must be between 0 and 1")
    return value


def get_matching_config() -> MatchingConfig:
    timeout = env_float("PROVIDER_TIMEOUT_SECONDS", None)
    if timeout is not None and timeout <= 0:
        raise ConfigurationError("Variable [PROVIDER_TIMEOUT_SECONDS] must be positive")
    return MatchingConfig(
        artist_similarity_threshold=_threshold(
            "ARTIST_SIMILARITY_THRESHOLD", DEFAULT_ARTIST_SIMILARITY_THRESHOLD
        ),
        title_similarity_threshold=_threshold(
            "TITLE_SIMILARITY_THRESHOLD", DEFAULT_TITLE_SIMILARITY_THRESHOLD
        ),
        provider_timeout_seconds=timeout,
    )
