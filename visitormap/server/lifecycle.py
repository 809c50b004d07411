"""Application lifecycle hooks for startup and shutdown."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from visitormap.config.settings import get_settings

if TYPE_CHECKING:
    from litestar import Litestar

    from visitormap.config.settings import Settings
    from visitormap.services.analytics import AnalyticsService
    from visitormap.services.visitors import VisitorTracker

logger = logging.getLogger(__name__)


async def on_startup(app: "Litestar") -> None:
    """Report where the server listens and which log file is analysed."""
    settings: Settings = getattr(app.state, "settings", None) or get_settings()
    analytics_service: AnalyticsService | None = getattr(app.state, "analytics_service", None)
    if analytics_service is not None:
        logger.info("Analysing access log %s", analytics_service.parser.log_path)
    logger.info("Running at http://localhost:%d", settings.api.port)


async def on_shutdown(app: "Litestar") -> None:
    """Close outbound HTTP connections and the GeoIP database."""
    analytics_service: AnalyticsService | None = getattr(app.state, "analytics_service", None)
    if analytics_service is not None:
        await analytics_service.geo_client.aclose()
        logger.info("Closed geolocation client")

    visitor_tracker: VisitorTracker | None = getattr(app.state, "visitor_tracker", None)
    if visitor_tracker is not None:
        visitor_tracker.close()
        logger.info("Closed GeoIP reader")
