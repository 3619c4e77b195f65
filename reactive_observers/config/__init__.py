"""
Configuration

Settings and logging configuration.
"""

from .settings import (
    Settings,
    LoggingSettings,
    EventSettings,
    get_settings,
    initialize_settings,
    reset_settings,
)

__all__ = [
    "Settings",
    "LoggingSettings",
    "EventSettings",
    "get_settings",
    "initialize_settings",
    "reset_settings",
]
