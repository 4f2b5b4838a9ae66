"""Configuration management using pydantic-settings.

Supports environment variables and .env file loading.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration.

    Every field can be overridden with a ``FEEDJSON_`` prefixed
    environment variable, e.g. ``FEEDJSON_CACHE_DIR=/var/cache/feeds``.
    """

    model_config = SettingsConfigDict(
        env_prefix="FEEDJSON_",
        env_file=(".env", ".env.local"),  # .env.local overrides .env
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "feedjson"
    log_level: str = "INFO"
    log_json: bool = False  # Set True in production for structured logs

    # Feed
    feed_url: str | None = Field(
        default=None,
        description="Feed URL used when the caller does not supply one",
    )
    feed_format: str = Field(default="rss", description="Input syntax of the feed")
    fetch_timeout: int = Field(default=30, ge=1, description="HTTP timeout in seconds")
    user_agent: str = "feedjson/1.0 (RSS to JSON proxy)"

    # Cache
    is_cache: bool = True
    cache_dir: Path = Field(
        default=Path("data/cache"),
        description="Directory holding one raw blob per cached feed",
    )
    stale_if_unknown: bool = Field(
        default=True,
        description="Treat cache entries without a stored timestamp as stale",
    )

    # Output
    default_callback: str = "processResponse"
    force_object: bool = True

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000


# Global singleton instance
settings = Settings()
