"""Services package."""

from feedjson.services.feed_manager import FeedManager, validate_feed_url

__all__ = [
    "FeedManager",
    "validate_feed_url",
]
