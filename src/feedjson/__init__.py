"""feedjson - fetch RSS feeds, cache them, and serve them as JSON or JSONP."""

__version__ = "0.1.0"
