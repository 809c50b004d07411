"""Schemas for parsed log data - pure data, no HTTP dependencies."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class LogEntry:
    """One access log line in combined log format."""

    ip: str
    remote_user: str
    timestamp: str
    method: str
    url: str
    protocol: str
    status: int
    body_size: int
    referer: str
    user_agent: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "ip": self.ip,
            "remoteUser": self.remote_user,
            "timestamp": self.timestamp,
            "method": self.method,
            "url": self.url,
            "protocol": self.protocol,
            "status": self.status,
            "bodySize": self.body_size,
            "referer": self.referer,
            "userAgent": self.user_agent,
        }


@dataclass(frozen=True)
class Parsed:
    """A line that matched the combined log grammar."""

    entry: LogEntry


@dataclass(frozen=True)
class Skipped:
    """A line that was dropped, with the reason it was dropped."""

    raw_line: str
    reason: str


ParseResult = Union[Parsed, Skipped]
