"""Batch IP geolocation client for ip-api.com compatible endpoints.

Resolves many addresses in one round trip per chunk and stores every answer,
including failures, in a GeoCache so that an address is only queried once.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

import httpx

from .cache import GeoCache
from .schemas import LocationInfo

logger = logging.getLogger(__name__)

BATCH_FIELDS = "status,message,country,countryCode,regionName,city,lat,lon,query"
MAX_BATCH_SIZE = 100


class BatchGeolocationClient:
    """Resolves uncached IP addresses through a bulk lookup endpoint.

    Example:
        client = BatchGeolocationClient(GeoCache(), batch_url="http://ip-api.com/batch")
        await client.resolve({"1.1.1.1", "8.8.8.8"})
        client.lookup("1.1.1.1")
        await client.aclose()
    """

    def __init__(
        self,
        cache: GeoCache,
        *,
        batch_url: str = "http://ip-api.com/batch",
        batch_size: int = MAX_BATCH_SIZE,
        timeout: float = 5.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Args:
            cache: Cache populated with every resolved address.
            batch_url: Bulk lookup endpoint.
            batch_size: Max addresses per request, capped at 100.
            timeout: Seconds allowed for each chunk request.
            http_client: Optional preconfigured client, closed by aclose().
        """
        self.cache: GeoCache = cache
        self.batch_url: str = batch_url
        self.batch_size: int = max(1, min(batch_size, MAX_BATCH_SIZE))
        self.timeout: float = timeout
        self._http: httpx.AsyncClient = http_client or httpx.AsyncClient(timeout=timeout)

        # Statistics
        self.requests_sent: int = 0
        self.failed_requests: int = 0

    def lookup(self, ip: str) -> LocationInfo:
        """Return the cached location, or the Unknown placeholder."""
        return self.cache.get(ip) or LocationInfo.unknown()

    async def resolve(self, ips: Iterable[str]) -> dict[str, LocationInfo]:
        """Look up every address not already cached.

        Returns the locations known for the requested addresses after this call,
        cache hits included, independent of later cache eviction. A chunk whose
        request fails is logged and left out, so a later call tries it again.
        Remaining chunks are still sent.
        """
        requested = list(dict.fromkeys(ips))
        pending = self.cache.missing(requested)
        resolved: dict[str, LocationInfo] = {
            ip: self.cache.get(ip) for ip in requested if ip in self.cache
        }

        if not pending:
            logger.debug("All addresses already cached")
            return resolved

        for start in range(0, len(pending), self.batch_size):
            chunk = pending[start:start + self.batch_size]
            try:
                results = await self._fetch(chunk)
            except (httpx.HTTPError, ValueError) as e:
                self.failed_requests += 1
                logger.warning(
                    "Batch geolocation lookup failed for %d address(es): %s", len(chunk), e
                )
                continue
            resolved.update(self._store(chunk, results))
        return resolved

    async def _fetch(self, chunk: list[str]) -> list[Any]:
        payload = [{"query": ip, "fields": BATCH_FIELDS} for ip in chunk]
        self.requests_sent += 1
        response = await self._http.post(self.batch_url, json=payload, timeout=self.timeout)
        response.raise_for_status()
        results = response.json()
        if not isinstance(results, list):
            raise ValueError(f"Expected a JSON array from batch endpoint, got {type(results).__name__}")
        return results

    def _store(self, chunk: list[str], results: list[Any]) -> dict[str, LocationInfo]:
        stored: dict[str, LocationInfo] = {}
        for position, result in enumerate(results):
            if not isinstance(result, dict):
                logger.debug("Ignoring malformed batch result: %r", result)
                continue

            ip = result.get("query")
            if not ip and position < len(chunk):
                ip = chunk[position]
            if not ip:
                continue

            if result.get("status") == "success":
                location = LocationInfo.from_batch_result(result)
            else:
                logger.debug("Geolocation lookup failed for %s: %s", ip, result.get("message"))
                location = LocationInfo.unknown()
            self.cache.set(ip, location)
            stored[ip] = location
        return stored

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._http.aclose()
