"""API package."""

from feedjson.api.routes import get_manager_factory, get_settings, router

__all__ = [
    "router",
    "get_settings",
    "get_manager_factory",
]
