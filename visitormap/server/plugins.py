"""Service factories and shared configuration.

This module provides builders for:
- The analytics service (LogParser + BatchGeolocationClient + GeoCache)
- The visitor tracker (local GeoIP reader)
- Logging configuration
"""
from __future__ import annotations

import logging

import httpx
from litestar.logging import LoggingConfig

from visitormap.config.settings import Settings
from visitormap.services.analytics import AnalyticsService
from visitormap.services.geolocation import BatchGeolocationClient, GeoCache
from visitormap.services.logparser import LogParser
from visitormap.services.visitors import VisitorTracker, create_reader

logger = logging.getLogger(__name__)


def create_analytics_service(
    settings: Settings, http_client: httpx.AsyncClient | None = None
) -> AnalyticsService:
    """Build the analytics service and the geolocation cache it owns."""
    geo_client = BatchGeolocationClient(
        GeoCache(max_entries=settings.geoip.cache_max_entries),
        batch_url=settings.geoip.batch_url,
        batch_size=settings.geoip.batch_size,
        timeout=settings.geoip.timeout,
        http_client=http_client,
    )
    return AnalyticsService(
        parser=LogParser(log_path=settings.logparser.log_path),
        geo_client=geo_client,
        default_lines=settings.logparser.default_lines,
    )


def create_visitor_tracker(settings: Settings) -> VisitorTracker:
    """Build the visitor tracker. Tracking is disabled if the GeoIP database is missing."""
    reader = None
    if settings.geoip.db_path.exists():
        reader = create_reader(settings.geoip.db_path, settings.geoip.locales)
    else:
        logger.warning(
            "GeoIP database %s not found, visitor tracking disabled.", settings.geoip.db_path
        )
    return VisitorTracker(reader, max_entries=settings.visitors.max_entries)


def create_logging_config(settings: Settings) -> LoggingConfig:
    return LoggingConfig(
        root={"level": settings.api.log_level, "handlers": ["queue_listener"]},
        formatters={
            "standard": {"format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"}
        },
        log_exceptions="always",
    )
