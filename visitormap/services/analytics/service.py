"""Access log analytics - parse the log tail and join geolocation onto each entry.

This service orchestrates:
- Reading the trailing window of the access log via LogParser
- Resolving client IPs via BatchGeolocationClient
- Returning enriched entries newest first
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from visitormap.domain.analytics.dtos import EnrichedEntry
from visitormap.services.geolocation.schemas import LocationInfo

if TYPE_CHECKING:
    from visitormap.services.geolocation.client import BatchGeolocationClient
    from visitormap.services.logparser.logparser import LogParser


logger = logging.getLogger(__name__)

DEFAULT_LINE_COUNT = 200


class LogFileNotFoundError(FileNotFoundError):
    """Raised when the configured access log does not exist."""


class AnalyticsService:
    """Builds enriched views of the most recent access log entries.

    Example:
        service = AnalyticsService(parser=parser, geo_client=geo_client)
        entries = await service.recent_entries(lines=500)
    """

    def __init__(
        self,
        parser: "LogParser",
        geo_client: "BatchGeolocationClient",
        *,
        default_lines: int = DEFAULT_LINE_COUNT,
    ) -> None:
        """
        Args:
            parser: LogParser bound to the access log.
            geo_client: Batch client owning the shared geolocation cache.
            default_lines: Window used when no positive line count is requested.
        """
        self.parser: LogParser = parser
        self.geo_client: BatchGeolocationClient = geo_client
        self.default_lines: int = default_lines

    def line_window(self, lines: int | None) -> int:
        """Number of trailing lines to analyse; missing or non-positive means the default."""
        if lines is None or lines <= 0:
            return self.default_lines
        return lines

    async def recent_entries(self, lines: int | None = None) -> list[EnrichedEntry]:
        """Parse and enrich the last ``lines`` lines of the access log.

        Raises:
            LogFileNotFoundError: The access log does not exist.
            OSError: The access log could not be read.
        """
        window = self.line_window(lines)

        if not await self.parser.log_exists():
            raise LogFileNotFoundError(f"Access log {self.parser.log_path} does not exist")

        raw_lines = await self.parser.read_tail(window)
        entries = self.parser.parse_lines(raw_lines)
        unique_ips = {entry.ip for entry in entries}
        logger.debug(
            "Parsed %d of %d line(s), %d unique IP(s)", len(entries), len(raw_lines), len(unique_ips)
        )

        locations = await self.geo_client.resolve(unique_ips)

        enriched = [
            EnrichedEntry(entry=entry, location=locations.get(entry.ip) or LocationInfo.unknown())
            for entry in entries
        ]
        enriched.reverse()
        return enriched
