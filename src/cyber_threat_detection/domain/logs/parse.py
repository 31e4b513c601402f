"""Line-level parsing of authentication logs."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
import re

IP_PATTERN = re.compile(r"\b(?:[0-9]{1,3}\.){3}[0-9]{1,3}\b")
TIME_PATTERN = re.compile(r"\b[0-9]{2}:[0-9]{2}:[0-9]{2}\b")
USER_PATTERN = re.compile(r"user[:\s]+(\S+)", re.IGNORECASE)
FAILED_LOGIN_MARKER = "Failed login"

# Only the time of day is read; every timestamp lands on the same date.
EPOCH_DATE = datetime(1970, 1, 1)


@dataclass(frozen=True)
class LogEntry:
    line_number: int
    raw: str
    ip: str | None = None
    timestamp: datetime | None = None
    user: str | None = None
    is_failed_login: bool = False


def parse_time_of_day(token: str) -> datetime | None:
    try:
        parsed = datetime.strptime(token, "%H:%M:%S")
    except ValueError:
        return None
    return EPOCH_DATE.replace(hour=parsed.hour, minute=parsed.minute, second=parsed.second)


def _first_time_of_day(line: str) -> datetime | None:
    match = TIME_PATTERN.search(line)
    if not match:
        return None
    return parse_time_of_day(match.group(0))


def parse_line(line: str, line_number: int = 0) -> LogEntry:
    ip_match = IP_PATTERN.search(line)
    user_match = USER_PATTERN.search(line)
    return LogEntry(
        line_number=line_number,
        raw=line,
        ip=ip_match.group(0) if ip_match else None,
        timestamp=_first_time_of_day(line),
        user=user_match.group(1) if user_match else None,
        is_failed_login=FAILED_LOGIN_MARKER in line,
    )


def parse_log_text(text: str) -> list[LogEntry]:
    """Parse every non-blank line; line numbers are 1-based positions in the input."""

    entries: list[LogEntry] = []
    for index, line in enumerate((text or "").split("\n"), 1):
        if not line.strip():
            continue
        entries.append(parse_line(line, index))
    return entries
