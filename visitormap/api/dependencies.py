"""Shared dependency providers for API layer."""
from __future__ import annotations

from litestar import Request

from visitormap.services.analytics import AnalyticsService
from visitormap.services.visitors import VisitorTracker


def provide_analytics_service(request: Request) -> AnalyticsService:
    """Provide the AnalyticsService created at app startup."""
    return request.app.state.analytics_service


def provide_visitor_tracker(request: Request) -> VisitorTracker:
    """Provide the VisitorTracker created at app startup."""
    return request.app.state.visitor_tracker
