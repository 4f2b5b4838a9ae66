"""Connectors package."""

from feedjson.connectors.base import Connector
from feedjson.connectors.http import HttpConnector

__all__ = [
    "Connector",
    "HttpConnector",
]
