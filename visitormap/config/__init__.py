"""Configuration module for VisitorMap."""

from visitormap.config.settings import (
    APISettings,
    GeoIPSettings,
    LogParserSettings,
    Settings,
    StaticSettings,
    VisitorSettings,
    get_settings,
)

__all__ = [
    "Settings",
    "get_settings",
    "APISettings",
    "GeoIPSettings",
    "LogParserSettings",
    "StaticSettings",
    "VisitorSettings",
]
