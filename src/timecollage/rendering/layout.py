"""Grid geometry for the collage canvas."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from timecollage.config.collage import CollageConfig


def grid_side(album_count: int, max_side: int) -> int:
    """Side of the square grid: ``min(max_side, ceil(sqrt(n)))``, at least 1."""

    if album_count <= 0:
        return 1
    return max(1, min(max_side, math.ceil(math.sqrt(album_count))))


@dataclass(frozen=True, slots=True)
class CollageLayout:
    """Cells hold a label band of ``label_height`` pixels above square album art."""

    side: int
    art_size: int
    label_height: int

    @classmethod
    def for_count(cls, album_count: int, config: CollageConfig) -> CollageLayout:
        return cls(
            side=grid_side(album_count, config.max_grid_side),
            art_size=config.art_size,
            label_height=config.label_lines * config.label_line_height,
        )

    @property
    def capacity(self) -> int:
        return self.side * self.side

    @property
    def cell_width(self) -> int:
        return self.art_size

    @property
    def cell_height(self) -> int:
        return self.art_size + self.label_height

    @property
    def canvas_size(self) -> tuple[int, int]:
        return self.cell_width * self.side, self.cell_height * self.side

    def origin(self, index: int) -> tuple[int, int]:
        """Top-left corner of cell ``index``, counted row-major."""

        if not 0 <= index < self.capacity:
            raise IndexError(f"Cell {index} is outside a {self.side}x{self.side} grid")
        row, col = divmod(index, self.side)
        return col * self.cell_width, row * self.cell_height

    def art_origin(self, index: int) -> tuple[int, int]:
        x, y = self.origin(index)
        return x, y + self.label_height
