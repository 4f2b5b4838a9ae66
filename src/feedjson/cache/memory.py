"""In-memory cache implementation.

Useful for tests and for long-running processes that do not want disk I/O.
"""

import time
from pathlib import Path
from typing import Callable

from feedjson.cache.base import CacheEntry, cache_key, is_entry_stale


class MemoryCacheAdapter:
    """Dictionary-backed raw feed cache."""

    def __init__(
        self,
        stale_if_unknown: bool = True,
        clock: Callable[[], float] = time.time,
    ):
        self._entries: dict[str, CacheEntry] = {}
        self._stale_if_unknown = stale_if_unknown
        self._clock = clock
        self._cache_dir: Path | None = None

    @property
    def cache_dir(self) -> Path | None:
        return self._cache_dir

    def set_cache_dir(self, cache_dir: Path | str) -> None:
        # Kept for interface parity; entries stay in memory.
        self._cache_dir = Path(cache_dir)

    def get_cache_dir(self) -> Path | None:
        return self._cache_dir

    def put_entry(self, url: str, entry: CacheEntry) -> None:
        """Store a prepared entry, timestamp included (or missing)."""
        self._entries[cache_key(url)] = entry

    def get_entry(self, url: str) -> CacheEntry | None:
        return self._entries.get(cache_key(url))

    def get_data(self, url: str) -> bytes | None:
        entry = self.get_entry(url)
        return entry.data if entry is not None else None

    def update_cache(self, url: str, data: bytes) -> None:
        self._entries[cache_key(url)] = CacheEntry(data=bytes(data), stored_at=self._clock())

    def is_stale(self, url: str, max_age_seconds: float) -> bool:
        return is_entry_stale(
            self.get_entry(url),
            max_age_seconds,
            now=self._clock(),
            stale_if_unknown=self._stale_if_unknown,
        )

    def __len__(self) -> int:
        return len(self._entries)
