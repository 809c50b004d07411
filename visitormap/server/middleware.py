"""Visitor tracking middleware."""
from __future__ import annotations

from typing import TYPE_CHECKING

from litestar import Request
from litestar.enums import ScopeType
from litestar.middleware import ASGIMiddleware

if TYPE_CHECKING:
    from litestar.types import ASGIApp, Receive, Scope, Send

    from visitormap.services.visitors import VisitorTracker


def client_ip(request: Request) -> str | None:
    """Original client address: first X-Forwarded-For hop, else the socket peer."""
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        first = forwarded_for.split(",")[0].strip()
        if first:
            return first
    return request.client.host if request.client else None


class VisitorTrackingMiddleware(ASGIMiddleware):
    """Records the location of every incoming HTTP request before handling it."""

    scopes = (ScopeType.HTTP,)

    def __init__(self, tracker: "VisitorTracker") -> None:
        self.tracker = tracker

    async def handle(self, scope: "Scope", receive: "Receive", send: "Send", next_app: "ASGIApp") -> None:
        self.tracker.record(client_ip(Request(scope)))
        await next_app(scope, receive, send)
