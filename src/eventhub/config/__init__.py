"""Configuration for the EventHub core."""

from .settings import CoreSettings, get_settings

__all__ = [
    "CoreSettings",
    "get_settings",
]
