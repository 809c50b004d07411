from .analytics.dtos import AnalyticsResponse
from .analytics.dtos import EnrichedEntry
from .analytics.dtos import ErrorResponse
from .visitors.models import Visitor

__all__ = [
    "AnalyticsResponse",
    "EnrichedEntry",
    "ErrorResponse",
    "Visitor",
]
