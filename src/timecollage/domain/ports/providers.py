"""Port for external track-duration lookups."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from timecollage.domain.model import Track


class ProviderLookupError(RuntimeError):
    """Raised by providers when a lookup fails for a reason worth logging."""


@runtime_checkable
class DurationProvider(Protocol):
    """A single data source in the duration fallback chain.

    ``name`` doubles as the rate-limiter key. Providers that need the album's
    MusicBrainz id set ``requires_album_id`` and are skipped for tracks without one.
    ``lookup`` returns milliseconds or ``None`` and may raise; the resolver treats
    both as "no duration from this provider".
    """

    @property
    def name(self) -> str: ...

    @property
    def requires_album_id(self) -> bool: ...

    async def lookup(self, track: Track) -> int | None: ...


__all__ = ["DurationProvider", "ProviderLookupError"]
