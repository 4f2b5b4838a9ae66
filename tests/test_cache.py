"""Tests for cache adapters and the staleness rule."""

import os
import stat

import pytest

from feedjson.cache import (
    CacheEntry,
    FileCacheAdapter,
    MemoryCacheAdapter,
    cache_key,
    create_cache_adapter,
    is_entry_stale,
)
from feedjson.exceptions import CacheError


class TestCacheKey:
    def test_deterministic(self, feed_url):
        assert cache_key(feed_url) == cache_key(feed_url)

    def test_distinct_urls(self, feed_url):
        assert cache_key(feed_url) != cache_key(feed_url + "?page=2")

    def test_is_sha256_hex(self, feed_url):
        key = cache_key(feed_url)

        assert len(key) == 64
        int(key, 16)


class TestStalenessRule:
    def test_missing_entry_is_stale(self):
        assert is_entry_stale(None, 300, now=1000.0) is True

    def test_unknown_timestamp_defaults_to_stale(self):
        entry = CacheEntry(data=b"x", stored_at=None)

        assert is_entry_stale(entry, 300, now=1000.0) is True
        assert is_entry_stale(entry, 300, now=1000.0, stale_if_unknown=False) is False

    @pytest.mark.parametrize(
        "elapsed, expected",
        [(0, False), (299, False), (300, False), (301, True)],
    )
    def test_boundary(self, elapsed, expected):
        entry = CacheEntry(data=b"x", stored_at=1000.0)

        assert is_entry_stale(entry, 300, now=1000.0 + elapsed) is expected


class TestFileCacheAdapter:
    def test_miss_returns_none(self, tmp_path, feed_url):
        adapter = FileCacheAdapter(tmp_path)

        assert adapter.get_data(feed_url) is None
        assert adapter.get_entry(feed_url) is None

    def test_update_then_read(self, tmp_path, feed_url, sample_rss):
        adapter = FileCacheAdapter(tmp_path / "nested" / "cache")
        adapter.update_cache(feed_url, sample_rss)

        assert adapter.get_data(feed_url) == sample_rss
        assert adapter.path_for(feed_url).read_bytes() == sample_rss
        assert adapter.path_for(feed_url).name == f"{cache_key(feed_url)}.xml"

    def test_empty_bytes_are_not_a_miss(self, tmp_path, feed_url):
        adapter = FileCacheAdapter(tmp_path)
        adapter.update_cache(feed_url, b"")

        assert adapter.get_data(feed_url) == b""

    def test_overwrite(self, tmp_path, feed_url):
        adapter = FileCacheAdapter(tmp_path)
        adapter.update_cache(feed_url, b"old")
        adapter.update_cache(feed_url, b"new")

        assert adapter.get_data(feed_url) == b"new"
        assert [p.name for p in tmp_path.iterdir()] == [adapter.path_for(feed_url).name]

    def test_stale_boundary_uses_mtime(self, tmp_path, feed_url, clock):
        adapter = FileCacheAdapter(tmp_path, clock=clock)
        adapter.update_cache(feed_url, b"<rss/>")
        stored_at = 1_600_000_000
        os.utime(adapter.path_for(feed_url), (stored_at, stored_at))

        clock.now = stored_at + 299
        assert adapter.is_stale(feed_url, 5 * 60) is False

        clock.now = stored_at + 301
        assert adapter.is_stale(feed_url, 5 * 60) is True

    def test_missing_entry_is_stale(self, tmp_path, feed_url):
        assert FileCacheAdapter(tmp_path).is_stale(feed_url, 300) is True

    def test_entry_timestamp(self, tmp_path, feed_url):
        adapter = FileCacheAdapter(tmp_path)
        adapter.update_cache(feed_url, b"data")
        os.utime(adapter.path_for(feed_url), (1234, 1234))

        assert adapter.get_entry(feed_url) == CacheEntry(data=b"data", stored_at=1234.0)

    def test_changing_dir_does_not_migrate(self, tmp_path, feed_url):
        adapter = FileCacheAdapter(tmp_path / "a")
        adapter.update_cache(feed_url, b"data")

        adapter.set_cache_dir(tmp_path / "b")

        assert adapter.get_cache_dir() == tmp_path / "b"
        assert adapter.cache_dir == tmp_path / "b"
        assert adapter.get_data(feed_url) is None
        assert (tmp_path / "a" / f"{cache_key(feed_url)}.xml").exists()

    def test_blobs_are_world_readable(self, tmp_path, feed_url):
        adapter = FileCacheAdapter(tmp_path)
        adapter.update_cache(feed_url, b"data")

        assert stat.S_IMODE(adapter.path_for(feed_url).stat().st_mode) == 0o644

    def test_write_into_unusable_dir(self, tmp_path, feed_url):
        blocker = tmp_path / "cache"
        blocker.write_bytes(b"not a directory")
        adapter = FileCacheAdapter(blocker)

        with pytest.raises(CacheError):
            adapter.update_cache(feed_url, b"data")
        assert list(tmp_path.rglob(".tmp-*")) == []

    def test_failed_replace_removes_temp_file(self, tmp_path, feed_url, monkeypatch):
        def failing_replace(src, dst):
            raise PermissionError("read-only target")

        monkeypatch.setattr(os, "replace", failing_replace)
        adapter = FileCacheAdapter(tmp_path)

        with pytest.raises(CacheError, match="read-only target"):
            adapter.update_cache(feed_url, b"data")
        assert list(tmp_path.iterdir()) == []

    def test_unreadable_entry(self, tmp_path, feed_url):
        adapter = FileCacheAdapter(tmp_path)
        adapter.path_for(feed_url).mkdir()

        with pytest.raises(CacheError):
            adapter.get_entry(feed_url)
        with pytest.raises(CacheError):
            adapter.get_data(feed_url)

    def test_stat_failure_is_not_a_miss(self, tmp_path, feed_url):
        blocker = tmp_path / "cache"
        blocker.write_bytes(b"not a directory")
        adapter = FileCacheAdapter(blocker)

        with pytest.raises(CacheError):
            adapter.is_stale(feed_url, 300)


class TestMemoryCacheAdapter:
    def test_update_and_read(self, feed_url, clock):
        adapter = MemoryCacheAdapter(clock=clock)
        adapter.update_cache(feed_url, b"data")

        assert adapter.get_data(feed_url) == b"data"
        assert adapter.get_entry(feed_url).stored_at == clock.now
        assert len(adapter) == 1

    def test_staleness(self, feed_url, clock):
        adapter = MemoryCacheAdapter(clock=clock)
        adapter.update_cache(feed_url, b"data")

        clock.now += 299
        assert adapter.is_stale(feed_url, 300) is False
        clock.now += 2
        assert adapter.is_stale(feed_url, 300) is True

    def test_entry_without_timestamp(self, feed_url):
        default = MemoryCacheAdapter()
        lenient = MemoryCacheAdapter(stale_if_unknown=False)
        for adapter in (default, lenient):
            adapter.put_entry(feed_url, CacheEntry(data=b"data", stored_at=None))

        assert default.is_stale(feed_url, 300) is True
        assert lenient.is_stale(feed_url, 300) is False


class TestCacheFactory:
    def test_file_backend(self, tmp_path):
        adapter = create_cache_adapter("file", cache_dir=tmp_path)

        assert isinstance(adapter, FileCacheAdapter)
        assert adapter.get_cache_dir() == tmp_path

    def test_memory_backend(self):
        assert isinstance(create_cache_adapter("MEMORY"), MemoryCacheAdapter)

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            create_cache_adapter("redis")
