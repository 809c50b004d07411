"""Geolocation module - remote batch lookups and their cache."""
from .cache import GeoCache
from .client import BatchGeolocationClient
from .schemas import LocationInfo

__all__ = ["GeoCache", "BatchGeolocationClient", "LocationInfo"]
