"""Config package."""

from feedjson.config.settings import Settings, settings

__all__ = [
    "Settings",
    "settings",
]
