"""Recent visitors page."""
from __future__ import annotations

from html import escape

from litestar import get
from litestar.di import Provide
from litestar.enums import MediaType

from visitormap.services.visitors import VisitorTracker
from visitormap.api.dependencies import provide_visitor_tracker as pvt


@get(
    "/stats",
    media_type=MediaType.HTML,
    dependencies={"visitor_tracker": Provide(pvt, sync_to_thread=False)},
)
async def stats(visitor_tracker: VisitorTracker) -> str:
    """Render the most recent visitors as an HTML list."""
    items = "".join(
        f"<li><strong>{escape(v.time)}</strong>: "
        f"{escape(str(v.city))}, {escape(str(v.country))} (IP: {escape(v.ip)})</li>"
        for v in visitor_tracker.recent()
    )
    return f"<h1>Recent Visitors</h1><ul>{items}</ul>"
