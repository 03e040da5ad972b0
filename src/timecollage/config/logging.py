"""Logging configuration for the CLI and other entry points."""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(*, level: int | str | None = None, force: bool = False) -> None:
    """Initialise the root logger once with sensible defaults.

    Parameters mirror ``logging.basicConfig`` with a simplified contract: the level
    comes from ``LOG_LEVEL`` when not given and falls back to INFO. Pass
    ``force=True`` to reconfigure during tests or specialised entry points.
    """

    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        force=force,
    )
