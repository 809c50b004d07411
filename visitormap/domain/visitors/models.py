"""In-memory visitor records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass(frozen=True)
class Visitor:
    """A live visitor resolved through the local GeoIP database."""

    ip: str
    city: str | None
    country: str | None
    region: str | None
    coordinates: tuple[float, float] | None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def time(self) -> str:
        """Human readable timestamp used by the stats page."""
        return self.timestamp.strftime("%d/%m/%Y, %H:%M:%S")
