"""Collage rendering configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, optional_env_var
from .http_resilience import CacheConfig, ResilienceConfig

ALBUM_ART_SIZE = 300
LABEL_LINE_HEIGHT = 16
LABEL_LINES = 3
MAX_GRID_SIDE = 5
LABEL_MAX_CHARS = 32


@dataclass(frozen=True, slots=True)
class CollageConfig:
    art_size: int = ALBUM_ART_SIZE
    label_line_height: int = LABEL_LINE_HEIGHT
    label_lines: int = LABEL_LINES
    max_grid_side: int = MAX_GRID_SIDE
    label_max_chars: int = LABEL_MAX_CHARS
    show_labels: bool = True
    font_path: str | None = None


def artwork_resilience(*, sqlite_path: str | None = None) -> ResilienceConfig:
    return ResilienceConfig(
        name="artwork",
        timeout_seconds=20.0,
        cache=CacheConfig(backend="sqlite", sqlite_path=sqlite_path),
        follow_redirects=True,
    )


def get_collage_config() -> CollageConfig:
    return CollageConfig(
        show_labels=env_bool("SHOW_LISTENING_TIME", default=True),
        font_path=optional_env_var("COLLAGE_FONT_PATH"),
    )
