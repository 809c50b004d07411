"""In-memory IP to location cache."""
from __future__ import annotations

import logging
from collections import OrderedDict
from collections.abc import Iterable

from .schemas import LocationInfo

logger = logging.getLogger(__name__)


class GeoCache:
    """Process-wide mapping of IP address to resolved LocationInfo.

    Negative results are stored too, so an address is looked up at most once
    while its entry is retained. With ``max_entries`` set, the oldest inserted
    entries are evicted first; ``0`` keeps every entry for the life of the process.
    """

    def __init__(self, max_entries: int = 10_000) -> None:
        self.max_entries = max_entries
        self._entries: OrderedDict[str, LocationInfo] = OrderedDict()

    def __contains__(self, ip: object) -> bool:
        return ip in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, ip: str) -> LocationInfo | None:
        return self._entries.get(ip)

    def set(self, ip: str, location: LocationInfo) -> None:
        self._entries[ip] = location
        if self.max_entries and len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("GeoCache full (%d entries), evicted %s", self.max_entries, evicted)

    def missing(self, ips: Iterable[str]) -> list[str]:
        """Return the given IPs that have no cache entry, deduplicated, in input order."""
        return [ip for ip in dict.fromkeys(ips) if ip not in self._entries]
