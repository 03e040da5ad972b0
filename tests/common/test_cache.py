from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from timecollage.common.cache import DEFAULT_EXPIRATION_MS, JsonFileCache

if TYPE_CHECKING:
    from pathlib import Path


class _Clock:
    def __init__(self, now: int = 1_000) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now


def _cache(path: Path, clock: _Clock, *, expiration_ms: int = 100) -> JsonFileCache[str, int]:
    return JsonFileCache[str, int](
        path, key_translate=str.lower, expiration_ms=expiration_ms, clock=clock
    )


def test_get_returns_value_and_renews_expiry(tmp_path: Path) -> None:
    clock = _Clock()
    cache = _cache(tmp_path / "cache.json", clock)
    cache.set("Key", 42)

    clock.now += 90
    assert cache.get("KEY") == 42

    clock.now += 90
    assert cache.get("key") == 42


def test_get_without_renew_lets_entry_expire(tmp_path: Path) -> None:
    clock = _Clock()
    cache = _cache(tmp_path / "cache.json", clock)
    cache.set("key", 42)

    clock.now += 90
    assert cache.get("key", renew=False) == 42

    clock.now += 20
    assert cache.get("key") is None


def test_expired_entries_are_hidden_and_removed_by_clean(tmp_path: Path) -> None:
    clock = _Clock()
    cache = _cache(tmp_path / "cache.json", clock)
    cache.set("old", 1)
    clock.now += 50
    cache.set("new", 2)

    clock.now += 60
    assert cache.get("old", renew=False) is None
    assert len(cache) == 2
    assert cache.clean() == 1
    assert len(cache) == 1
    assert cache.get("new") == 2


def test_unset_removes_entry(tmp_path: Path) -> None:
    cache = _cache(tmp_path / "cache.json", _Clock())
    cache.set("key", 1)
    cache.unset("KEY")
    cache.unset("missing")
    assert cache.get("key") is None


def test_save_then_load_preserves_entries_and_format(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "cache.json"
    clock = _Clock()
    cache = _cache(path, clock)
    cache.set("Artist.Album.Song", 215_000)
    cache.save()

    raw = json.loads(path.read_text(encoding="utf-8"))
    assert raw == {"artist.album.song": {"v": 215_000, "e": 1_100}}
    assert not (path.parent / ".cache.json.partial").exists()

    reloaded = _cache(path, clock)
    assert reloaded.get("artist.album.song") == 215_000


def test_file_is_read_only_at_construction(tmp_path: Path) -> None:
    path = tmp_path / "cache.json"
    clock = _Clock()
    cache = _cache(path, clock)
    path.write_text(json.dumps({"other": {"v": 1, "e": 5_000}}), encoding="utf-8")

    assert len(cache) == 0
    assert cache.get("other") is None
    assert not hasattr(cache, "load")
    assert _cache(path, clock).get("other") == 1


def test_save_skips_expired_entries(tmp_path: Path) -> None:
    path = tmp_path / "cache.json"
    clock = _Clock()
    cache = _cache(path, clock)
    cache.set("gone", 1)
    clock.now += 500
    cache.set("kept", 2)
    cache.save()

    assert set(json.loads(path.read_text(encoding="utf-8"))) == {"kept"}


def test_missing_file_starts_empty(tmp_path: Path) -> None:
    cache = _cache(tmp_path / "absent.json", _Clock())
    assert len(cache) == 0


@pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]", '"text"'])
def test_unreadable_file_starts_empty_with_warning(
    tmp_path: Path, content: str, caplog: pytest.LogCaptureFixture
) -> None:
    path = tmp_path / "cache.json"
    path.write_text(content, encoding="utf-8")

    with caplog.at_level("WARNING"):
        cache = _cache(path, _Clock())

    assert len(cache) == 0
    assert any("starting empty" in record.getMessage() for record in caplog.records)


def test_malformed_entries_are_dropped(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "cache.json"
    path.write_text(
        json.dumps(
            {
                "good": {"v": 1, "e": 5_000},
                "no-expiry": {"v": 2},
                "bool-expiry": {"v": 3, "e": True},
                "scalar": 4,
            }
        ),
        encoding="utf-8",
    )

    with caplog.at_level("WARNING"):
        cache = _cache(path, _Clock())

    assert len(cache) == 1
    assert cache.get("good") == 1
    assert "Dropped 3 malformed entries" in caplog.text


def test_destroy_clears_store_and_file(tmp_path: Path) -> None:
    path = tmp_path / "cache.json"
    cache = _cache(path, _Clock())
    cache.set("key", 1)
    cache.save()

    cache.destroy()

    assert len(cache) == 0
    assert not path.exists()
    cache.destroy()


def test_warn_cache_misses_logs_at_warning(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    cache = JsonFileCache[str, int](tmp_path / "cache.json", warn_cache_misses=True)

    with caplog.at_level("WARNING"):
        assert cache.get("missing") is None

    assert "Cache miss for key [missing]" in caplog.text


def test_default_expiration_is_one_month() -> None:
    assert DEFAULT_EXPIRATION_MS == 2_629_800_000


def test_non_positive_expiration_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="expiration"):
        JsonFileCache[str, int](tmp_path / "cache.json", expiration_ms=0)
