"""Live visitor tracking backed by a local GeoLite2 database."""
from __future__ import annotations

import logging
from collections import deque
from functools import lru_cache
from pathlib import Path
from typing import Any

from geoip2.database import Reader
from geoip2.errors import GeoIP2Error
from IPy import IP
from maxminddb import InvalidDatabaseError

from visitormap.domain.visitors.models import Visitor
from visitormap.services.logparser.constants import (
    ALLOWED_GEOIP_LOCALES,
    GEOIP_LOCALES_DEFAULT,
    NON_ROUTABLE_IP_TYPES,
)

logger = logging.getLogger(__name__)


def create_reader(path: Path | str, locales: list[str] | None = None) -> Reader | None:
    """Create a GeoIP2 Reader instance, or None when the database cannot be opened."""
    if any(loc not in ALLOWED_GEOIP_LOCALES for loc in locales or []):
        logger.warning(
            "Unmatched GeoIp2 locale found. Allowed are '%s', defaulting to 'en'",
            ALLOWED_GEOIP_LOCALES,
        )
        locales = GEOIP_LOCALES_DEFAULT
    try:
        return Reader(path, locales=locales)
    except Exception:
        logger.exception("Failed to create GeoIP2 Reader for path: %s", path)
        return None


def get_ip_type(ip: str) -> str:
    """Get the IPy type of the given IP address.

    If the IP address is invalid, return an empty string.
    """
    try:
        return IP(ip).iptype()
    except ValueError:
        logger.debug("Invalid IP address %s.", ip)
        return ""


@lru_cache(maxsize=1024)
def is_routable_ip(ip: str) -> bool:
    """Check that the address is valid and could appear in a GeoIP database."""
    ip_type = get_ip_type(ip)
    if not ip_type or ip_type in NON_ROUTABLE_IP_TYPES:
        logger.debug("IP type %s (%s) is not a monitored IP type.", ip_type, ip)
        return False
    return True


class VisitorTracker:
    """Keeps the most recent visitors that could be geolocated.

    The visitor list is bounded; once full the oldest visitor is dropped.
    Without a GeoIP reader nothing is recorded.
    """

    def __init__(self, reader: Any | None, *, max_entries: int = 50) -> None:
        """
        Args:
            reader: geoip2 Reader (or any object with a compatible ``city()``).
            max_entries: Number of visitors kept.
        """
        self.reader = reader
        self.max_entries = max_entries
        self._visitors: deque[Visitor] = deque(maxlen=max_entries)

    def __len__(self) -> int:
        return len(self._visitors)

    def recent(self) -> list[Visitor]:
        """Stored visitors, oldest first."""
        return list(self._visitors)

    def record(self, ip: str | None) -> Visitor | None:
        """Resolve and store a visitor. Returns None when the address cannot be located."""
        if not ip or self.reader is None or not is_routable_ip(ip):
            return None

        try:
            ip_data = self.reader.city(ip)
        except (GeoIP2Error, ValueError) as e:
            logger.debug("GeoIP lookup failed for %s: %s", ip, e)
            return None
        except InvalidDatabaseError as e:
            logger.warning("GeoIP database error while looking up %s: %s", ip, e)
            return None

        if not ip_data:
            return None

        latitude = ip_data.location.latitude
        longitude = ip_data.location.longitude
        coordinates = (latitude, longitude) if latitude is not None and longitude is not None else None

        visitor = Visitor(
            ip=ip,
            city=ip_data.city.name,
            country=ip_data.country.iso_code,
            region=ip_data.subdivisions.most_specific.iso_code,
            coordinates=coordinates,
        )
        self._visitors.append(visitor)
        return visitor

    def close(self) -> None:
        """Close the GeoIP reader."""
        if self.reader is not None and hasattr(self.reader, "close"):
            self.reader.close()
