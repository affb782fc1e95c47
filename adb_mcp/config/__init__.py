"""Configuration module for adb-mcp."""

from adb_mcp.config.settings import (
    AdbSettings,
    LogSettings,
    ServerSettings,
    Settings,
    get_settings,
    settings,
)

__all__ = [
    "AdbSettings",
    "LogSettings",
    "ServerSettings",
    "Settings",
    "get_settings",
    "settings",
]
