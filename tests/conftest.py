from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pathlib import Path

_TUNING_VARS = (
    "ARTIST_SIMILARITY_THRESHOLD",
    "TITLE_SIMILARITY_THRESHOLD",
    "PROVIDER_TIMEOUT_SECONDS",
    "SHOW_LISTENING_TIME",
    "COLLAGE_FONT_PATH",
    "LASTFM_MAX_REQUESTS_PER_SECOND",
    "MUSICBRAINZ_MAX_REQUESTS_PER_SECOND",
    "SPOTIFY_MAX_REQUESTS_PER_SECOND",
    "BANDCAMP_MAX_REQUESTS_PER_SECOND",
)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Keep caches out of the user's data directory and ignore local tuning."""

    data_dir = tmp_path / "data"
    monkeypatch.setenv("TIMECOLLAGE_DATA_DIR", str(data_dir))
    for name in _TUNING_VARS:
        monkeypatch.delenv(name, raising=False)
    return data_dir
