"""Render an activity summary into a labelled album-art grid."""

from __future__ import annotations

import asyncio
import contextlib
import os
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from PIL import Image, ImageDraw, ImageFont

from timecollage.common.text import trim_text
from timecollage.config.collage import CollageConfig

from .formats import ImageFormat, output_format_for
from .layout import CollageLayout

if TYPE_CHECKING:
    from timecollage.domain.model import ActivitySummary, AlbumListening

log = getLogger(__name__)

BACKGROUND_COLOR = (0, 0, 0)
LABEL_COLOR = (255, 255, 255)
JPEG_QUALITY = 92

type LabelFont = ImageFont.FreeTypeFont | ImageFont.ImageFont


class ArtworkSource(Protocol):
    async def fetch(self, url: str) -> Image.Image: ...


def load_label_font(font_path: str | None, size: int) -> LabelFont:
    if font_path:
        try:
            return ImageFont.truetype(font_path, size=size)
        except OSError as exc:
            log.warning("Could not load font [%s], using the default: %s", font_path, exc)
    return ImageFont.load_default(size=size)


def _encode(canvas: Image.Image, path: Path, image_format: ImageFormat) -> None:
    partial = path.with_name(f".{path.name}.partial")
    options: dict[str, object] = {"quality": JPEG_QUALITY} if image_format == "JPEG" else {}
    try:
        canvas.save(partial, format=image_format, optimize=True, **options)
        os.replace(partial, path)
    except BaseException:
        with contextlib.suppress(FileNotFoundError):
            partial.unlink()
        raise


class CollageRenderer:
    def __init__(self, *, artwork: ArtworkSource, config: CollageConfig | None = None) -> None:
        self._artwork = artwork
        self._config = config or CollageConfig()

    @property
    def config(self) -> CollageConfig:
        return self._config

    async def render(self, output_path: Path | str, summary: ActivitySummary) -> ActivitySummary:
        """Draw ``summary`` and write it to ``output_path``, replacing any existing file.

        The format is validated before anything is fetched. Artwork failures leave
        a blank cell; encoding failures propagate.
        """

        path = Path(output_path)
        image_format = output_format_for(path)

        layout = CollageLayout.for_count(len(summary.albums), self._config)
        albums = summary.albums[: layout.capacity]
        canvas = Image.new("RGB", layout.canvas_size, BACKGROUND_COLOR)
        draw = ImageDraw.Draw(canvas)
        font = load_label_font(self._config.font_path, self._config.label_line_height)

        log.info(
            "Rendering %d albums on a %dx%d grid into [%s]",
            len(albums),
            layout.side,
            layout.side,
            path,
        )
        # Every cell owns a disjoint region of the canvas.
        async with asyncio.TaskGroup() as group:
            for index, listening in enumerate(albums):
                group.create_task(self._draw_cell(canvas, draw, font, layout, index, listening))

        await asyncio.to_thread(_encode, canvas, path, image_format)
        log.info("Saved collage for %s to [%s]", summary.user, path)
        return summary

    async def _draw_cell(
        self,
        canvas: Image.Image,
        draw: ImageDraw.ImageDraw,
        font: LabelFont,
        layout: CollageLayout,
        index: int,
        listening: AlbumListening,
    ) -> None:
        album = listening.album
        x, y = layout.origin(index)

        if album.cover_url:
            try:
                art = await self._artwork.fetch(album.cover_url)
            except Exception as exc:  # noqa: BLE001
                log.warning(
                    "Could not get album art for album [%s] with cover [%s]: %s",
                    album.title,
                    album.cover_url,
                    str(exc) or type(exc).__name__,
                )
            else:
                log.debug(
                    "Rendering album art for album #%d ['%s' by %s] at [x=%d y=%d]",
                    index + 1,
                    album.title,
                    album.artist,
                    x,
                    y,
                )
                canvas.paste(art, layout.art_origin(index))
        else:
            log.warning("Album [%s] has no cover url", album.title)

        if not self._config.show_labels:
            return

        lines = (
            trim_text(listening.artist_label, self._config.label_max_chars),
            trim_text(album.title, self._config.label_max_chars),
            listening.duration_label(),
        )
        line_height = self._config.label_line_height
        baseline_anchored = isinstance(font, ImageFont.FreeTypeFont)
        for number, text in enumerate(lines[: self._config.label_lines], start=1):
            if baseline_anchored:
                draw.text(
                    (x, y + number * line_height - 2),
                    text,
                    font=font,
                    fill=LABEL_COLOR,
                    anchor="ls",
                )
            else:
                # Bitmap fonts only support top-left anchoring.
                draw.text((x, y + (number - 1) * line_height), text, font=font, fill=LABEL_COLOR)
