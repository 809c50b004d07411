"""Log parser module - parsing only, no HTTP or geolocation."""
from .logparser import LogParser
from .schemas import LogEntry, Parsed, ParseResult, Skipped

__all__ = ["LogParser", "LogEntry", "Parsed", "ParseResult", "Skipped"]
