"""Cache package."""

from feedjson.cache.base import CacheAdapter, CacheEntry, cache_key, is_entry_stale
from feedjson.cache.factory import create_cache_adapter
from feedjson.cache.filesystem import FileCacheAdapter
from feedjson.cache.memory import MemoryCacheAdapter

__all__ = [
    "CacheAdapter",
    "CacheEntry",
    "cache_key",
    "is_entry_stale",
    "FileCacheAdapter",
    "MemoryCacheAdapter",
    "create_cache_adapter",
]
