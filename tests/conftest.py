"""Test configuration and fixtures."""

import pytest

from feedjson.exceptions import RetrievalError
from feedjson.parsers.rss_parser import RssParser

FEED_URL = "https://example.com/rss/presentation/library"

SAMPLE_RSS = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:media="http://search.yahoo.com/mrss/"
     xmlns:dc="http://purl.org/dc/elements/1.1/">
  <channel>
    <title>Sample Presentation</title>
    <link>https://example.com/presentation</link>
    <description><![CDATA[Reel <b>2024</b>]]></description>
    <ttl>5</ttl>
    <item>
      <title>Spot One</title>
      <link>https://example.com/spot-one</link>
      <enclosure url="https://cdn.example.com/one.mp4" type="video/mp4" length="1024">ignored</enclosure>
      <dc:creator>Jane Doe</dc:creator>
      <media:content url="https://cdn.example.com/one-hd.mp4" type="video/mp4" height="1080"/>
      <media:thumbnail url="https://cdn.example.com/one.jpg" width="640"/>
    </item>
    <item>
      <title>Spot Two</title>
      <link>https://example.com/spot-two</link>
    </item>
  </channel>
</rss>
"""

SAMPLE_RSS_NO_TTL = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>No TTL</title>
    <item><title>Only item</title></item>
  </channel>
</rss>
"""


class FakeConnector:
    """Connector returning canned responses and recording calls."""

    def __init__(self, responses=None, error: Exception | None = None):
        self.responses = list(responses or [SAMPLE_RSS])
        self.error = error
        self.calls: list[str] = []

    def fetch_data(self, url: str) -> bytes:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        if len(self.responses) > 1:
            return self.responses.pop(0)
        return self.responses[0]


class CountingParser(RssParser):
    """RssParser that counts process() calls."""

    def __init__(self) -> None:
        super().__init__()
        self.process_calls = 0

    def process(self):
        self.process_calls += 1
        return super().process()


class FailingCache:
    """Cache adapter that fails the test if it is touched."""

    cache_dir = None

    def __getattr__(self, name):
        raise AssertionError(f"cache adapter accessed: {name}")


class FakeClock:
    """Settable clock for staleness tests."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def feed_url():
    return FEED_URL


@pytest.fixture
def sample_rss():
    """Sample RSS 2.0 feed with media and dc namespaces and a 5 minute ttl."""
    return SAMPLE_RSS


@pytest.fixture
def sample_rss_no_ttl():
    return SAMPLE_RSS_NO_TTL


@pytest.fixture
def connector():
    return FakeConnector()


@pytest.fixture
def counting_parser():
    return CountingParser()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def retrieval_error():
    return RetrievalError(FEED_URL, "HTTP 503: unavailable")
