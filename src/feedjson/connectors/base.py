"""Abstract connector interface using Protocol."""

from typing import Protocol


class Connector(Protocol):
    """Feed retrieval abstraction protocol.

    A connector makes exactly one attempt per call; retry policy belongs to
    the caller.
    """

    def fetch_data(self, url: str) -> bytes:
        """Fetch the raw bytes served at ``url``.

        Args:
            url: Feed URL.

        Returns:
            Non-empty raw response body.

        Raises:
            RetrievalError: On transport failure, non-success status or
                an empty body.
        """
        ...
