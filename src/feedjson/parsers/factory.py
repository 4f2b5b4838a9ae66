"""Parser factory keyed by input format."""

from feedjson.exceptions import ConfigurationError
from feedjson.parsers.base import FeedParser
from feedjson.parsers.rss_parser import RssParser

_PARSERS: dict[str, type] = {
    "rss": RssParser,
    "xml": RssParser,
}


def supported_formats() -> list[str]:
    return sorted(_PARSERS)


def create_parser(format: str = "rss") -> FeedParser:
    """Create a parser for the given input format.

    Raises:
        ConfigurationError: If the format is unsupported.
    """
    parser_cls = _PARSERS.get((format or "").strip().lower())
    if parser_cls is None:
        raise ConfigurationError(
            f"Unsupported feed format: {format!r}. Supported formats: "
            + ", ".join(supported_formats())
        )
    return parser_cls()
