"""Persistent JSON key/value cache with sliding expiry.

The backing file is a flat JSON object mapping each translated key to
``{"v": <value>, "e": <expiry epoch ms>}``. It is read once at construction and
rewritten wholesale by :meth:`JsonFileCache.save`. Only one process may own a
given file.
"""

from __future__ import annotations

import json
import os
import threading
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from logging import getLogger
from pathlib import Path
from typing import Final, cast

log = getLogger(__name__)

DEFAULT_EXPIRATION_MS: Final[int] = 2_629_800_000  # one month

type Clock = Callable[[], int]


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(slots=True)
class CacheEntry[V]:
    value: V
    expires_at: int

    def is_expired(self, now: int) -> bool:
        return now >= self.expires_at

    def to_json(self) -> dict[str, object]:
        return {"v": self.value, "e": self.expires_at}


class JsonFileCache[K, V]:
    """Key/value store persisted as JSON, keyed through ``key_translate``."""

    def __init__(
        self,
        path: Path | str,
        *,
        key_translate: Callable[[K], str] | None = None,
        expiration_ms: int = DEFAULT_EXPIRATION_MS,
        warn_cache_misses: bool = False,
        clock: Clock = _now_ms,
    ) -> None:
        if expiration_ms <= 0:
            raise ValueError("Cache expiration must be positive")
        self.path = Path(path)
        self.expiration_ms = expiration_ms
        self.warn_cache_misses = warn_cache_misses
        self._key_translate = key_translate or cast(Callable[[K], str], str)
        self._clock = clock
        self._lock = threading.Lock()
        self._store: dict[str, CacheEntry[V]] = self._load()

    def __len__(self) -> int:
        return len(self._store)

    def key_for(self, raw_key: K) -> str:
        return self._key_translate(raw_key)

    def _load(self) -> dict[str, CacheEntry[V]]:
        """Read the backing file; anything unreadable yields an empty cache."""

        started = time.perf_counter()
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            log.info("No cache file at %s, starting empty", self.path)
            return {}
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            log.warning("Could not read cache file %s, starting empty: %s", self.path, exc)
            return {}

        if not isinstance(raw, Mapping):
            log.warning("Cache file %s does not hold a JSON object, starting empty", self.path)
            return {}

        store: dict[str, CacheEntry[V]] = {}
        dropped = 0
        for key, item in cast(Mapping[str, object], raw).items():
            entry = _entry_from_json(item)
            if entry is None:
                dropped += 1
                continue
            store[key] = cast(CacheEntry[V], entry)
        if dropped:
            log.warning("Dropped %d malformed entries from cache file %s", dropped, self.path)
        log.debug(
            "Loaded %d cache entries from %s in %.0fms",
            len(store),
            self.path,
            (time.perf_counter() - started) * 1000,
        )
        return store

    def get(self, raw_key: K, *, renew: bool = True) -> V | None:
        key = self.key_for(raw_key)
        now = self._clock()
        with self._lock:
            entry = self._store.get(key)
            if entry is not None and not entry.is_expired(now):
                if renew:
                    entry.expires_at = now + self.expiration_ms
                return entry.value
        if self.warn_cache_misses:
            log.warning("Cache miss for key [%s] in cache [%s]", key, self.path)
        return None

    def set(self, raw_key: K, value: V) -> None:
        key = self.key_for(raw_key)
        entry = CacheEntry(value=value, expires_at=self._clock() + self.expiration_ms)
        with self._lock:
            self._store[key] = entry

    def unset(self, raw_key: K) -> None:
        key = self.key_for(raw_key)
        with self._lock:
            self._store.pop(key, None)

    def clean(self) -> int:
        """Physically drop expired entries and return how many were removed."""

        now = self._clock()
        with self._lock:
            expired = [key for key, entry in self._store.items() if entry.is_expired(now)]
            for key in expired:
                del self._store[key]
        if expired:
            log.debug("Removed %d expired entries from cache [%s]", len(expired), self.path)
        return len(expired)

    def save(self) -> None:
        started = time.perf_counter()
        self.clean()
        with self._lock:
            payload = {key: entry.to_json() for key, entry in self._store.items()}
        self.path.parent.mkdir(parents=True, exist_ok=True)
        partial = self.path.with_name(f".{self.path.name}.partial")
        partial.write_text(json.dumps(payload), encoding="utf-8")
        os.replace(partial, self.path)
        log.info(
            "Saved %d cache entries to %s in %.0fms",
            len(payload),
            self.path,
            (time.perf_counter() - started) * 1000,
        )

    def destroy(self) -> None:
        with self._lock:
            self._store.clear()
        self.path.unlink(missing_ok=True)


def _entry_from_json(item: object) -> CacheEntry[object] | None:
    if not isinstance(item, Mapping):
        return None
    mapping = cast(Mapping[str, object], item)
    expires_at = mapping.get("e")
    if "v" not in mapping or isinstance(expires_at, bool) or not isinstance(expires_at, int):
        return None
    return CacheEntry(value=mapping["v"], expires_at=expires_at)
