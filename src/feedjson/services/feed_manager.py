"""Feed manager - the orchestration layer.

Decides between cache hit, miss and stale refresh, drives the connector
and hands raw bytes to the parser.
"""

from urllib.parse import urlsplit

import structlog

from feedjson.cache.base import CacheAdapter
from feedjson.cache.filesystem import FileCacheAdapter
from feedjson.config.settings import Settings
from feedjson.connectors.base import Connector
from feedjson.connectors.http import HttpConnector
from feedjson.exceptions import ConfigurationError, RetrievalError
from feedjson.models.feed import FeedConfig
from feedjson.models.parsed import ParsedFeed
from feedjson.parsers.base import FeedParser
from feedjson.parsers.factory import create_parser

logger = structlog.get_logger()

_ALLOWED_SCHEMES = ("http", "https")


def validate_feed_url(url: str | None) -> str:
    """Return ``url`` stripped, or raise if it cannot be fetched.

    Raises:
        ConfigurationError: When the URL is empty or not an absolute
            http(s) URL.
    """
    if url is None or not url.strip():
        raise ConfigurationError("Feed urls cannot be empty")
    url = url.strip()
    parts = urlsplit(url)
    if parts.scheme.lower() not in _ALLOWED_SCHEMES or not parts.netloc:
        raise ConfigurationError(f"Invalid feed url supplied: {url!r}")
    return url


class FeedManager:
    """Primary entry point for feed processing.

    Owns one connector, one parser and one cache adapter. The configuration
    is fixed at construction time; build a new manager for another feed.
    """

    def __init__(
        self,
        config: FeedConfig,
        connector: Connector | None = None,
        parser: FeedParser | None = None,
        cache_adapter: CacheAdapter | None = None,
    ):
        """Initialize the feed manager.

        Args:
            config: Feed configuration.
            connector: Retrieval mechanism. Defaults to HttpConnector.
            parser: Feed parser. Defaults to the parser for ``config.format``.
            cache_adapter: Cache backend. Defaults to a FileCacheAdapter in
                ``config.cache_dir``.

        Raises:
            ConfigurationError: If the feed URL or format is invalid. Raised
                before any network or cache access.
        """
        self._feed_url = validate_feed_url(config.feed_url)
        self._config = config
        self._parser = parser if parser is not None else create_parser(config.format)
        if connector is None:
            connector = HttpConnector(
                timeout=config.fetch_timeout,
                user_agent=config.user_agent,
            )
        if cache_adapter is None:
            cache_adapter = FileCacheAdapter(
                config.cache_dir,
                stale_if_unknown=config.stale_if_unknown,
            )
        self._connector = connector
        self._cache_adapter = cache_adapter

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        feed_url: str | None = None,
        **overrides,
    ) -> "FeedManager":
        """Build a manager from application settings.

        Args:
            settings: Application settings.
            feed_url: Feed URL, defaults to ``settings.feed_url``.
            **overrides: FeedConfig fields that take precedence.
        """
        return cls(FeedConfig.from_settings(settings, feed_url=feed_url, **overrides))

    @property
    def config(self) -> FeedConfig:
        return self._config

    @property
    def feed_url(self) -> str:
        return self._feed_url

    @property
    def is_cache(self) -> bool:
        return self._config.is_cache

    @property
    def format(self) -> str:
        return self._parser.format

    @property
    def connector(self) -> Connector:
        return self._connector

    @property
    def parser(self) -> FeedParser:
        return self._parser

    @property
    def cache_adapter(self) -> CacheAdapter:
        return self._cache_adapter

    def get_cache_dir(self):
        return self._cache_adapter.get_cache_dir()

    def get_property(self, name: str) -> str | None:
        """Property discovered by the parser during the last run."""
        return self._parser.get_property(name)

    def process(self) -> ParsedFeed:
        """Load the feed from cache or the connector and parse it.

        Raises:
            RetrievalError: When the feed cannot be fetched.
            ParseError: When the feed is malformed.
            CacheError: When the cache cannot be read or written.
        """
        if self.is_cache:
            return self.process_cache()
        return self.process_data()

    def process_cache(self) -> ParsedFeed:
        """Serve from the cache, fetching on a miss or when stale."""
        url = self._feed_url
        log = logger.bind(url=url)

        feed_data = self._cache_adapter.get_data(url)
        if feed_data is None:
            log.info("Feed not cached, fetching")
            feed_data = self.get_contents(url)
            self._cache_adapter.update_cache(url, feed_data)
            return self._parser.set_contents(feed_data).process()

        parsed = self._parser.set_contents(feed_data).process()

        ttl_minutes = self._ttl_minutes()
        if ttl_minutes is None:
            log.debug("Cache hit without ttl, serving cached feed")
            return parsed

        if not self._cache_adapter.is_stale(url, ttl_minutes * 60):
            log.debug("Cache hit, feed fresh", ttl=ttl_minutes)
            return parsed

        log.info("Cached feed stale, refreshing", ttl=ttl_minutes)
        feed_data = self.get_contents(url)
        self._cache_adapter.update_cache(url, feed_data)
        return self._parser.set_contents(feed_data).process()

    def process_data(self) -> ParsedFeed:
        """Fetch and parse without touching the cache."""
        feed_contents = self.get_contents(self._feed_url)
        return self._parser.set_contents(feed_contents).process()

    def get_contents(self, url: str) -> bytes:
        """Fetch raw feed bytes through the connector.

        Usable on its own to retrieve any feed URL.

        Raises:
            ConfigurationError: If ``url`` is invalid.
            RetrievalError: If the connector fails or returns nothing.
        """
        url = validate_feed_url(url)
        contents = self._connector.fetch_data(url)
        if not contents:
            raise RetrievalError(url, "Failed to retrieve data")
        return contents

    def _ttl_minutes(self) -> int | None:
        """Feed-declared ttl in minutes, or None when absent or unusable."""
        raw = self._parser.get_property("ttl")
        if not raw:
            return None
        try:
            ttl = int(raw.strip())
        except ValueError:
            logger.warning("Ignoring non-numeric ttl", url=self._feed_url, ttl=raw)
            return None
        if ttl <= 0:
            return None
        return ttl
