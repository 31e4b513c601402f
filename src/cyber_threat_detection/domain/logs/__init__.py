"""Authentication log parsing and verdict models."""

from cyber_threat_detection.domain.logs.models import AttackPattern, LogVerdict
from cyber_threat_detection.domain.logs.parse import LogEntry, parse_line, parse_log_text

__all__ = ["AttackPattern", "LogEntry", "LogVerdict", "parse_line", "parse_log_text"]
