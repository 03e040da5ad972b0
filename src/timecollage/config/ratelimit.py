"""Per-provider request budgets."""

from __future__ import annotations

from .env import env_float
from .errors import ConfigurationError
from .http_resilience import DEFAULT_RATE_LIMIT, RateLimit


def get_rate_limit(provider: str) -> RateLimit:
    """Read ``{PROVIDER}_MAX_REQUESTS_PER_SECOND``, defaulting to one call per second."""

    per_second = env_float(f"{provider.upper()}_MAX_REQUESTS_PER_SECOND", None)
    if per_second is None:
        return DEFAULT_RATE_LIMIT
    if per_second <= 0:
        raise ConfigurationError(f"{provider} request rate must be positive")
    if per_second.is_integer():
        return RateLimit(max_calls=int(per_second), per_seconds=1.0)
    # fractional rates become one call per 1/rate seconds
    return RateLimit(max_calls=1, per_seconds=1.0 / per_second)
