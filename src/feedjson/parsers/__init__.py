"""Parsers package."""

from feedjson.parsers.base import FeedParser
from feedjson.parsers.factory import create_parser, supported_formats
from feedjson.parsers.rss_parser import RssParser
from feedjson.parsers.tree import XmlDocument, XmlNode, build_document

__all__ = [
    "FeedParser",
    "RssParser",
    "XmlDocument",
    "XmlNode",
    "build_document",
    "create_parser",
    "supported_formats",
]
