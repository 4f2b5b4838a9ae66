"""Cache factory for creating cache adapters.

Provides a factory function to create the appropriate cache backend.
"""

from pathlib import Path

from feedjson.cache.base import CacheAdapter
from feedjson.cache.filesystem import FileCacheAdapter
from feedjson.cache.memory import MemoryCacheAdapter


def create_cache_adapter(
    backend: str = "file",
    cache_dir: Path | str = Path("data/cache"),
    stale_if_unknown: bool = True,
) -> CacheAdapter:
    """Create a cache adapter.

    Args:
        backend: "file" or "memory".
        cache_dir: Storage directory for the file backend.
        stale_if_unknown: Staleness result for entries without a timestamp.

    Returns:
        CacheAdapter instance.

    Raises:
        ValueError: If the backend is unsupported.
    """
    backend = backend.lower()

    if backend == "file":
        return FileCacheAdapter(cache_dir, stale_if_unknown=stale_if_unknown)

    elif backend == "memory":
        return MemoryCacheAdapter(stale_if_unknown=stale_if_unknown)

    else:
        raise ValueError(f"Unsupported cache backend: {backend}. Supported backends: file, memory")
