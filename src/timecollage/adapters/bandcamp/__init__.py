"""Bandcamp duration adapter."""

from __future__ import annotations

from .client import BandcampClient
from .parser import BandcampScrapeError, SearchResult, parse_search_results, parse_track_duration_ms
from .provider import BandcampDurationProvider

__all__ = [
    "BandcampClient",
    "BandcampDurationProvider",
    "BandcampScrapeError",
    "SearchResult",
    "parse_search_results",
    "parse_track_duration_ms",
]
