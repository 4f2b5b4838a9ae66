"""Shapes of the generic structure produced by feed parsers.

A parsed feed is an ordered list of elements. Each element maps a name to
either a scalar string (leaf fields such as ``title``) or, under the
``item`` key, to a mapping of item names. An item value is the item's text
or, when the item carries attributes, a mapping of attribute name to value.
"""

from typing import Union

ItemValue = Union[str, dict[str, str]]
Element = dict[str, Union[str, dict[str, ItemValue]]]
ParsedFeed = list[Element]

# Channel leaf fields exposed as parser properties after processing.
WELL_KNOWN_PROPERTIES = (
    "ttl",
    "title",
    "link",
    "description",
    "language",
    "pubDate",
    "lastBuildDate",
)
