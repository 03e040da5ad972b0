from __future__ import annotations

import pytest

from timecollage.common.text import format_duration, trim_text


@pytest.mark.parametrize(
    ("milliseconds", "expected"),
    [
        (0, "00:00:00"),
        (999, "00:00:00"),
        (380_000, "00:06:20"),
        (3_600_000, "01:00:00"),
        (90_061_000, "25:01:01"),
    ],
)
def test_format_duration(milliseconds: int, expected: str) -> None:
    assert format_duration(milliseconds) == expected


def test_format_duration_rejects_negative_values() -> None:
    with pytest.raises(ValueError, match="negative"):
        format_duration(-1)


def test_trim_text_keeps_short_values() -> None:
    assert trim_text("Short title", 32) == "Short title"
    assert trim_text("x" * 32, 32) == "x" * 32


def test_trim_text_appends_indicator_within_limit() -> None:
    trimmed = trim_text("A" * 40, 32)
    assert trimmed == "A" * 29 + "..."
    assert len(trimmed) == 32

