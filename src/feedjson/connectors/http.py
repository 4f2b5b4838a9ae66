"""HTTP connector implementation."""

import httpx
import structlog

from feedjson.exceptions import RetrievalError
from feedjson.utils.http_client import create_http_client

logger = structlog.get_logger()


class HttpConnector:
    """Fetches feed bytes over HTTP(S) with httpx.

    One GET per call, no retries. Redirects are followed.
    """

    def __init__(
        self,
        timeout: int = 30,
        user_agent: str = "feedjson/1.0 (RSS to JSON proxy)",
        client: httpx.Client | None = None,
    ):
        """Initialize HTTP connector.

        Args:
            timeout: Request timeout in seconds.
            user_agent: User-Agent header for requests.
            client: Optional pre-configured client. When given, the caller
                owns it and is responsible for closing it.
        """
        self._timeout = timeout
        self._user_agent = user_agent
        self._client = client

    def fetch_data(self, url: str) -> bytes:
        """Fetch raw feed bytes.

        Returns:
            Raw response body.

        Raises:
            RetrievalError: When the request fails, returns a non-2xx
                status, or returns an empty body.
        """
        try:
            if self._client is not None:
                content = self._get(self._client, url)
            else:
                with create_http_client(
                    timeout=self._timeout, user_agent=self._user_agent
                ) as client:
                    content = self._get(client, url)
        except httpx.TimeoutException as e:
            raise RetrievalError(url, f"Request timed out: {e}") from e
        except httpx.HTTPStatusError as e:
            raise RetrievalError(
                url, f"HTTP {e.response.status_code}: {e.response.text[:200]}"
            ) from e
        except httpx.RequestError as e:
            raise RetrievalError(url, f"Request failed: {e}") from e

        if not content:
            raise RetrievalError(url, "Empty response body")

        logger.debug("Feed fetched", url=url, size=len(content))
        return content

    def _get(self, client: httpx.Client, url: str) -> bytes:
        response = client.get(url)
        response.raise_for_status()
        return response.content
