"""Output image format detection."""

from __future__ import annotations

from pathlib import Path
from typing import Final, Literal

from timecollage.config.errors import UnsupportedOutputFormatError

type ImageFormat = Literal["JPEG", "PNG"]

_FORMATS_BY_SUFFIX: Final[dict[str, ImageFormat]] = {
    ".jpg": "JPEG",
    ".jpeg": "JPEG",
    ".png": "PNG",
}


def output_format_for(path: Path | str) -> ImageFormat:
    """Image format for ``path`` by extension, case-insensitively."""

    image_format = _FORMATS_BY_SUFFIX.get(Path(path).suffix.lower())
    if image_format is None:
        raise UnsupportedOutputFormatError(str(path))
    return image_format
