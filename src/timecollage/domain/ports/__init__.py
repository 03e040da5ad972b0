"""Domain port definitions for adapters."""

from __future__ import annotations

from .history import HistorySource
from .providers import DurationProvider, ProviderLookupError

__all__ = ["DurationProvider", "HistorySource", "ProviderLookupError"]
