"""Feed configuration models."""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from feedjson.config.settings import Settings


class FeedConfig(BaseModel):
    """Immutable configuration for processing a single feed.

    Built once and handed to ``FeedManager``; nothing mutates it afterwards.
    URL validation happens in the manager so that a bad URL surfaces as a
    ``ConfigurationError`` rather than a pydantic validation error.
    """

    model_config = {"frozen": True}

    feed_url: str = Field(..., description="URL hosting the RSS feed")
    is_cache: bool = Field(default=True, description="Cache raw feed bytes on disk")
    format: str = Field(default="rss", description="Input syntax of the feed")
    cache_dir: Path = Field(default=Path("data/cache"))
    stale_if_unknown: bool = Field(default=True)
    fetch_timeout: int = Field(default=30, ge=1)
    user_agent: str = "feedjson/1.0 (RSS to JSON proxy)"

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        feed_url: str | None = None,
        **overrides: Any,
    ) -> "FeedConfig":
        """Build a config from application settings.

        Args:
            settings: Application settings.
            feed_url: Feed URL; falls back to ``settings.feed_url``.
            **overrides: Field values that take precedence over settings.

        Returns:
            A frozen FeedConfig.
        """
        values: dict[str, Any] = {
            "feed_url": feed_url if feed_url is not None else (settings.feed_url or ""),
            "is_cache": settings.is_cache,
            "format": settings.feed_format,
            "cache_dir": settings.cache_dir,
            "stale_if_unknown": settings.stale_if_unknown,
            "fetch_timeout": settings.fetch_timeout,
            "user_agent": settings.user_agent,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
