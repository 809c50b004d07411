"""Central route registration."""
from pathlib import Path

from litestar.static_files import create_static_files_router
from litestar.types import ControllerRouterHandler

from visitormap.api.v1.analytics_controller import AnalyticsController
from visitormap.api.v1.stats import stats
from visitormap.config.settings import Settings


def get_route_handlers(settings: Settings) -> list[ControllerRouterHandler]:
    """Get all route handlers for the application."""
    handlers: list[ControllerRouterHandler] = [
        AnalyticsController,
        stats,
    ]
    static_dir: Path = settings.static.directory
    if settings.static.enabled and static_dir.is_dir():
        handlers.append(
            create_static_files_router(path="/", directories=[static_dir], html_mode=True)
        )
    return handlers
