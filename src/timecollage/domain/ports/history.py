"""Port for reading listening history."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Sequence
    from datetime import datetime

    from timecollage.domain.model import Track


@runtime_checkable
class HistorySource(Protocol):
    """Yields pages of played tracks for ``user`` within ``[start, end)``.

    Each call starts a fresh, forward-only iteration.
    """

    def pages(
        self,
        user: str,
        start: datetime,
        end: datetime,
    ) -> AsyncIterator[Sequence[Track]]: ...


__all__ = ["HistorySource"]
