"""Half-open time windows for collage requests."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Final, Protocol

DEFAULT_LOOKBACK: Final[timedelta] = timedelta(days=7)


class Clock(Protocol):
    def __call__(self) -> datetime: ...


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _ensure_aware(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        raise ValueError("Time window values must include timezone information")
    return value.astimezone(UTC)


@dataclass(frozen=True)
class TimeWindow:
    """Describe the ``[start, end)`` range of history to summarise.

    A missing end means "now"; a missing start means ``lookback`` before the end.
    """

    start: datetime | None = None
    end: datetime | None = None
    lookback: timedelta = DEFAULT_LOOKBACK

    def resolve(self, *, clock: Clock = _utcnow) -> tuple[datetime, datetime]:
        """Resolve the window into concrete UTC timestamps."""

        if self.lookback < timedelta(0):
            raise ValueError("Lookback duration must be non-negative")

        resolved_end = _ensure_aware(self.end)
        if resolved_end is None:
            anchor = clock()
            if anchor.tzinfo is None:
                anchor = anchor.replace(tzinfo=UTC)
            resolved_end = anchor.astimezone(UTC)

        resolved_start = _ensure_aware(self.start)
        if resolved_start is None:
            resolved_start = resolved_end - self.lookback

        if resolved_start >= resolved_end:
            raise ValueError("Time window start must be before end")

        return resolved_start, resolved_end


__all__ = ["DEFAULT_LOOKBACK", "Clock", "TimeWindow"]
