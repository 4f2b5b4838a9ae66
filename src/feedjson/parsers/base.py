"""Abstract feed parser interface using Protocol."""

from typing import Protocol

from feedjson.models.parsed import ParsedFeed


class FeedParser(Protocol):
    """Feed parser abstraction protocol.

    Usage is ``parser.set_contents(raw).process()``; properties discovered
    during the last ``process()`` call are then available through
    ``get_property``.
    """

    format: str

    def set_contents(self, contents: bytes | str) -> "FeedParser":
        """Replace the contents to parse.

        Returns:
            The parser itself, for chaining.
        """
        ...

    def process(self) -> ParsedFeed:
        """Parse the current contents.

        Returns:
            Ordered list of feed elements.

        Raises:
            ParseError: When contents are missing or malformed.
        """
        ...

    def get_property(self, name: str) -> str | None:
        """Return a scalar property found by the last ``process()`` call."""
        ...
