"""Models package."""

from feedjson.models.feed import FeedConfig
from feedjson.models.parsed import WELL_KNOWN_PROPERTIES, Element, ItemValue, ParsedFeed

__all__ = [
    "FeedConfig",
    "ParsedFeed",
    "Element",
    "ItemValue",
    "WELL_KNOWN_PROPERTIES",
]
