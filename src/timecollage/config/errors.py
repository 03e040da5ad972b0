"""Configuration error definitions."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when configuration values are invalid."""


class MissingConfigurationError(ConfigurationError):
    """Raised when required configuration values are absent or blank."""


class UnsupportedOutputFormatError(ConfigurationError):
    """Raised when a collage output path has an extension we cannot encode."""

    def __init__(self, path: str) -> None:
        super().__init__(
            f"Unrecognized file extension for file [{path}], cannot determine image format"
        )
        self.path = path
