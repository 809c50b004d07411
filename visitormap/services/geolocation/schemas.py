"""Schemas for resolved geolocation data."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from visitormap.services.logparser.constants import UNKNOWN


@dataclass(frozen=True)
class LocationInfo:
    """Resolved location for one IP address.

    Coordinates are only set when the remote lookup succeeded.
    """

    city: str = UNKNOWN
    country: str = UNKNOWN
    country_code: str = ""
    region: str = ""
    lat: float | None = None
    lon: float | None = None

    @classmethod
    def unknown(cls) -> LocationInfo:
        """Placeholder for IPs that could not be resolved."""
        return cls()

    @classmethod
    def from_batch_result(cls, result: dict[str, Any]) -> LocationInfo:
        """Build from a successful ip-api batch result item."""
        return cls(
            city=result.get("city") or UNKNOWN,
            country=result.get("country") or UNKNOWN,
            country_code=result.get("countryCode") or "",
            region=result.get("regionName") or "",
            lat=result.get("lat"),
            lon=result.get("lon"),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "city": self.city,
            "country": self.country,
            "countryCode": self.country_code,
            "region": self.region,
        }
        if self.lat is not None and self.lon is not None:
            data["lat"] = self.lat
            data["lon"] = self.lon
        return data
