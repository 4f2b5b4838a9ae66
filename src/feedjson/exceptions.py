"""Custom exceptions for feedjson.

Provides a structured exception hierarchy for the feed processing core.
"""


class FeedJsonError(Exception):
    """Base exception class for all feedjson errors."""

    pass


class ConfigurationError(FeedJsonError):
    """Raised when the feed configuration is unusable (e.g. empty feed URL)."""

    pass


class RetrievalError(FeedJsonError):
    """Raised when fetching the feed fails.

    Covers transport failures, non-success HTTP status and empty bodies.

    Attributes:
        url: The feed URL that could not be retrieved.
    """

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(f"Failed to retrieve {url}: {message}")


class ParseError(FeedJsonError):
    """Raised when feed content is not well-formed markup."""

    def __init__(self, message: str):
        super().__init__(f"Failed to parse feed: {message}")


class CacheError(FeedJsonError):
    """Raised when cache storage operations fail."""

    pass
