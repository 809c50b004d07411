"""Access log analytics endpoint."""

from __future__ import annotations

import logging
from typing import Annotated, Any

from litestar import Controller, Response, get
from litestar.di import Provide
from litestar.params import Parameter
from litestar.status_codes import HTTP_404_NOT_FOUND, HTTP_500_INTERNAL_SERVER_ERROR

from visitormap.domain.analytics.dtos import AnalyticsResponse, ErrorResponse
from visitormap.services.analytics import AnalyticsService, LogFileNotFoundError
from visitormap.api.dependencies import provide_analytics_service

logger = logging.getLogger(__name__)

PERMISSION_HINT = (
    "Check that the access log exists and is readable by the user running this server "
    "(e.g. add it to the adm group or adjust the log file permissions)."
)


class AnalyticsController(Controller):
    """Recent access log entries enriched with client geolocation."""

    path = "/analytics"
    tags = ["Analytics"]

    dependencies = {
        "analytics_service": Provide(provide_analytics_service, sync_to_thread=False),
    }

    @get("/", description="Parse the tail of the access log and geolocate each client IP.")
    async def get_analytics(
        self,
        analytics_service: AnalyticsService,
        lines: Annotated[
            int | None,
            Parameter(
                query="lines",
                description="Number of trailing log lines to analyse. Missing or 0 uses the default window.",
                required=False,
            ),
        ] = None,
    ) -> Response[dict[str, Any]]:
        """Return enriched entries, newest first."""
        try:
            entries = await analytics_service.recent_entries(lines)
        except LogFileNotFoundError as e:
            return Response(
                content=ErrorResponse(error="Log file not found", message=str(e)).to_dict(),
                status_code=HTTP_404_NOT_FOUND,
            )
        except Exception as e:
            logger.exception("Failed to build analytics from access log")
            return Response(
                content=ErrorResponse(
                    error="Failed to read analytics",
                    message=str(e),
                    hint=PERMISSION_HINT,
                ).to_dict(),
                status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(content=AnalyticsResponse(entries=entries).to_dict())
