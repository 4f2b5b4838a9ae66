"""Filesystem cache implementation.

One blob per feed key inside the cache directory. The blob is the exact
raw bytes returned by the connector and its mtime is the stored timestamp.
"""

import os
import tempfile
import time
from pathlib import Path
from typing import Callable

import structlog

from feedjson.cache.base import CacheEntry, cache_key, is_entry_stale
from feedjson.exceptions import CacheError

logger = structlog.get_logger()


class FileCacheAdapter:
    """Filesystem-backed raw feed cache.

    Writes go to a temporary file in the cache directory which is then
    renamed over the target, so readers see either the old or the new
    blob, never a partial one.
    """

    suffix = ".xml"

    def __init__(
        self,
        cache_dir: Path | str = Path("data/cache"),
        stale_if_unknown: bool = True,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize filesystem cache.

        Args:
            cache_dir: Directory for cached blobs. Created on first write.
            stale_if_unknown: Staleness result when no timestamp is available.
            clock: Returns current epoch seconds.
        """
        self._cache_dir = Path(cache_dir)
        self._stale_if_unknown = stale_if_unknown
        self._clock = clock

    @property
    def cache_dir(self) -> Path:
        return self._cache_dir

    def set_cache_dir(self, cache_dir: Path | str) -> None:
        self._cache_dir = Path(cache_dir)

    def get_cache_dir(self) -> Path:
        return self._cache_dir

    def path_for(self, url: str) -> Path:
        """Location of the blob for ``url``."""
        return self._cache_dir / f"{cache_key(url)}{self.suffix}"

    def get_entry(self, url: str) -> CacheEntry | None:
        path = self.path_for(url)
        try:
            data = path.read_bytes()
            stored_at = path.stat().st_mtime
        except FileNotFoundError:
            return None
        except OSError as e:
            raise CacheError(f"Failed to read cache entry {path}: {e}") from e
        return CacheEntry(data=data, stored_at=stored_at)

    def get_data(self, url: str) -> bytes | None:
        entry = self.get_entry(url)
        if entry is None:
            logger.debug("Cache miss", url=url)
            return None
        logger.debug("Cache hit", url=url, size=len(entry.data))
        return entry.data

    def update_cache(self, url: str, data: bytes) -> None:
        path = self.path_for(url)
        tmp_name = None
        try:
            self._cache_dir.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                dir=self._cache_dir, prefix=".tmp-", suffix=self.suffix, delete=False
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(data)
                tmp.flush()
                os.fsync(tmp.fileno())
            # NamedTemporaryFile creates 0600 files
            os.chmod(tmp_name, 0o644)
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise CacheError(f"Failed to write cache entry {path}: {e}") from e

        logger.debug("Cache updated", url=url, path=str(path), size=len(data))

    def is_stale(self, url: str, max_age_seconds: float) -> bool:
        path = self.path_for(url)
        try:
            entry = CacheEntry(data=b"", stored_at=path.stat().st_mtime)
        except FileNotFoundError:
            entry = None
        except OSError as e:
            raise CacheError(f"Failed to stat cache entry {path}: {e}") from e

        return is_entry_stale(
            entry,
            max_age_seconds,
            now=self._clock(),
            stale_if_unknown=self._stale_if_unknown,
        )
