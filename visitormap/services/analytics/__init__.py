from .service import AnalyticsService, LogFileNotFoundError

__all__ = ["AnalyticsService", "LogFileNotFoundError"]
