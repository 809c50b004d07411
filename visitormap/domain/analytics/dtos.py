"""DTOs for analytics data transfer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from visitormap.services.geolocation.schemas import LocationInfo
from visitormap.services.logparser.schemas import LogEntry


@dataclass(frozen=True)
class EnrichedEntry:
    """An access log entry joined with the location of its client IP."""

    entry: LogEntry
    location: LocationInfo = field(default_factory=LocationInfo.unknown)

    def to_dict(self) -> dict[str, Any]:
        data = self.entry.to_dict()
        data["location"] = self.location.to_dict()
        return data


@dataclass
class AnalyticsResponse:
    """Successful /analytics response body. Entries are newest first."""

    entries: list[EnrichedEntry] = field(default_factory=list)
    success: bool = True

    @property
    def count(self) -> int:
        return len(self.entries)

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "count": self.count,
            "entries": [entry.to_dict() for entry in self.entries],
        }


@dataclass
class ErrorResponse:
    """Error body returned by the analytics endpoint."""

    error: str
    message: str
    hint: str | None = None

    def to_dict(self) -> dict[str, str]:
        data = {"error": self.error, "message": self.message}
        if self.hint is not None:
            data["hint"] = self.hint
        return data
