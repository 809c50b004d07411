"""Application factory for creating Litestar app instance."""

from __future__ import annotations

from litestar import Litestar
from litestar.datastructures import State
from litestar.openapi import OpenAPIConfig
from litestar.middleware.logging import LoggingMiddlewareConfig

from visitormap.config.settings import Settings, get_settings
from visitormap.server import plugins
from visitormap.server.lifecycle import on_startup, on_shutdown
from visitormap.server.middleware import VisitorTrackingMiddleware
from visitormap.server.routes import get_route_handlers
from visitormap.services.analytics import AnalyticsService
from visitormap.services.visitors import VisitorTracker


def create_app(
    settings: Settings | None = None,
    *,
    analytics_service: AnalyticsService | None = None,
    visitor_tracker: VisitorTracker | None = None,
) -> Litestar:
    """Create and configure the Litestar application.

    The analytics service and visitor tracker are built once here and shared
    by every request through app state and dependency injection.

    Args:
        settings: Settings to use. Defaults to the cached environment settings.
        analytics_service: Prebuilt analytics service, mainly for tests.
        visitor_tracker: Prebuilt visitor tracker, mainly for tests.

    Returns:
        Litestar: Configured application instance
    """
    if settings is None:
        settings = get_settings()
    if analytics_service is None:
        analytics_service = plugins.create_analytics_service(settings)
    if visitor_tracker is None:
        visitor_tracker = plugins.create_visitor_tracker(settings)

    openapi_config = OpenAPIConfig(
        title=settings.name,
        version=settings.version,
        description=settings.description,
        create_examples=True,
    )

    logging_middleware_config = LoggingMiddlewareConfig()

    app = Litestar(
        debug=settings.debug,
        route_handlers=get_route_handlers(settings),
        on_startup=[on_startup],
        on_shutdown=[on_shutdown],
        state=State({
            "settings": settings,
            "analytics_service": analytics_service,
            "visitor_tracker": visitor_tracker,
        }),
        logging_config=plugins.create_logging_config(settings),
        openapi_config=openapi_config,
        middleware=[
            VisitorTrackingMiddleware(visitor_tracker),
            logging_middleware_config.middleware,
        ],
    )

    return app
