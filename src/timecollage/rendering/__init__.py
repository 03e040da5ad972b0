"""Collage rendering."""

from __future__ import annotations

from .artwork import ArtworkFetcher, decode_artwork
from .collage import CollageRenderer, load_label_font
from .formats import output_format_for
from .layout import CollageLayout, grid_side

__all__ = [
    "ArtworkFetcher",
    "CollageLayout",
    "CollageRenderer",
    "decode_artwork",
    "grid_side",
    "load_label_font",
    "output_format_for",
]
