"""Tests for the HTTP connector."""

import httpx
import pytest

from feedjson.connectors import HttpConnector
from feedjson.exceptions import RetrievalError


def connector_for(handler) -> HttpConnector:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return HttpConnector(client=client)


def test_returns_raw_bytes(feed_url, sample_rss):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, content=sample_rss)

    assert connector_for(handler).fetch_data(feed_url) == sample_rss
    assert seen == [feed_url]


@pytest.mark.parametrize("status_code", [404, 500, 503])
def test_error_status(feed_url, status_code):
    connector = connector_for(lambda request: httpx.Response(status_code, text="nope"))

    with pytest.raises(RetrievalError) as exc_info:
        connector.fetch_data(feed_url)

    assert exc_info.value.url == feed_url
    assert str(status_code) in str(exc_info.value)


def test_empty_body(feed_url):
    connector = connector_for(lambda request: httpx.Response(200, content=b""))

    with pytest.raises(RetrievalError):
        connector.fetch_data(feed_url)


def test_transport_failure(feed_url):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(RetrievalError):
        connector_for(handler).fetch_data(feed_url)


def test_timeout(feed_url):
    def handler(request):
        raise httpx.ReadTimeout("too slow", request=request)

    with pytest.raises(RetrievalError, match="timed out"):
        connector_for(handler).fetch_data(feed_url)


def test_single_attempt(feed_url):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(502)

    with pytest.raises(RetrievalError):
        connector_for(handler).fetch_data(feed_url)
    assert len(calls) == 1
