import logging
from collections.abc import Iterable
from pathlib import Path

import aiofiles
import aiofiles.os

from .constants import combined_log_pattern
from .schemas import LogEntry, Parsed, ParseResult, Skipped


logger = logging.getLogger(__name__)


class LogParser:
    """Reads and parses nginx access logs in combined log format.

    This module handles:
    - Reading the trailing window of an access log asynchronously
    - Matching log lines against the combined log grammar
    - Converting status and body size to integers
    """

    def __init__(self, log_path: Path) -> None:
        """
        Args:
            log_path (Path): The path to the access log file.
        """
        self.log_path = log_path

        # Statistics
        self.parsed_lines: int = 0
        self.skipped_lines: int = 0

        logger.debug("Log file path: %s", self.log_path)

    def parsed_lines_count(self) -> int:
        """Return the number of parsed lines."""
        return self.parsed_lines

    def skipped_lines_count(self) -> int:
        """Return the number of skipped lines."""
        return self.skipped_lines

    def parse_line(self, line: str) -> ParseResult:
        """Parse a single log line.

        Returns Parsed for a line fully matching the combined log grammar,
        otherwise Skipped with a short reason.
        """
        raw_line = line.rstrip()
        if not raw_line:
            return Skipped(raw_line=raw_line, reason="Empty line")

        matched = combined_log_pattern().fullmatch(raw_line)
        if not matched:
            return Skipped(raw_line=raw_line, reason="Line did not match expected log format")

        datadict = matched.groupdict()

        try:
            status = int(datadict["status"], 10)
        except ValueError:
            return Skipped(raw_line=raw_line, reason=f"Non-numeric status: {datadict['status']}")

        try:
            body_size = int(datadict["body_size"], 10)
        except ValueError:
            return Skipped(raw_line=raw_line, reason=f"Non-numeric body size: {datadict['body_size']}")

        return Parsed(
            LogEntry(
                ip=datadict["ip"],
                remote_user=datadict["remote_user"],
                timestamp=datadict["timestamp"],
                method=datadict["method"],
                url=datadict["url"],
                protocol=datadict["protocol"],
                status=status,
                body_size=body_size,
                referer=datadict["referer"],
                user_agent=datadict["user_agent"],
            )
        )

    def parse_lines(self, lines: Iterable[str]) -> list[LogEntry]:
        """Parse lines in order, dropping the ones that do not match."""
        entries: list[LogEntry] = []
        for line in lines:
            result = self.parse_line(line)
            if isinstance(result, Skipped):
                logger.debug("Skipping line (%s): '%s'", result.reason, result.raw_line)
                self.skipped_lines += 1
                continue
            self.parsed_lines += 1
            entries.append(result.entry)
        return entries

    async def log_exists(self) -> bool:
        """Check whether the log file exists."""
        exists = await aiofiles.os.path.exists(self.log_path)
        if not exists:
            logger.warning("Log file %s does not exist.", self.log_path)
        return exists

    async def read_tail(self, line_count: int) -> list[str]:
        """Read the file and return at most its last ``line_count`` lines."""
        if line_count <= 0:
            return []
        async with aiofiles.open(self.log_path, "r", encoding="utf-8", errors="replace") as file:
            content = await file.read()
        return content.splitlines()[-line_count:]
