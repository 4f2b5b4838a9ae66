"""Abstract cache interface using Protocol.

Cache entries are modelled as ``(data, stored_at)`` pairs keyed by a
digest of the feed URL. The filesystem is one backing store among others.
"""

import hashlib
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


def cache_key(url: str) -> str:
    """Derive the storage key for a feed URL.

    SHA-256 of the UTF-8 encoded URL, hex encoded. Deterministic, and
    distinct URLs never share a key in practice.
    """
    return hashlib.sha256(url.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class CacheEntry:
    """Raw feed bytes plus the time they were stored.

    Attributes:
        data: Exact bytes returned by the connector.
        stored_at: Epoch seconds of the last write, or None if unknown.
    """

    data: bytes
    stored_at: float | None = None

    def age(self, now: float) -> float | None:
        """Seconds elapsed since the entry was stored."""
        if self.stored_at is None:
            return None
        return now - self.stored_at


class CacheAdapter(Protocol):
    """Raw feed cache abstraction protocol."""

    @property
    def cache_dir(self) -> Path | None:
        """Storage location, if the backend has one."""
        ...

    def set_cache_dir(self, cache_dir: Path | str) -> None:
        """Point the adapter at a new storage location.

        Existing entries are not migrated.
        """
        ...

    def get_cache_dir(self) -> Path | None:
        """Return the current storage location."""
        ...

    def get_entry(self, url: str) -> CacheEntry | None:
        """Return the stored entry for ``url`` or None if absent."""
        ...

    def get_data(self, url: str) -> bytes | None:
        """Return cached bytes for ``url``.

        Returns:
            The stored bytes, or None when nothing is cached. An empty
            ``b""`` is a valid stored value, distinct from None.
        """
        ...

    def update_cache(self, url: str, data: bytes) -> None:
        """Store ``data`` for ``url``, replacing any previous entry.

        Raises:
            CacheError: When the write fails.
        """
        ...

    def is_stale(self, url: str, max_age_seconds: float) -> bool:
        """Check whether the entry for ``url`` is older than ``max_age_seconds``.

        Missing entries are stale.
        """
        ...


def is_entry_stale(
    entry: CacheEntry | None,
    max_age_seconds: float,
    now: float,
    stale_if_unknown: bool = True,
) -> bool:
    """Staleness rule shared by all cache backends.

    Args:
        entry: The cached entry, or None if nothing is stored.
        max_age_seconds: Maximum allowed age.
        now: Current epoch seconds.
        stale_if_unknown: Result to use when the entry has no timestamp.

    Returns:
        True when the entry should be refetched.
    """
    if entry is None:
        return True
    age = entry.age(now)
    if age is None:
        return stale_if_unknown
    return age > max_age_seconds
