"""Brute-force login scorer for authentication log text."""

from __future__ import annotations

from collections import Counter
import logging

from cyber_threat_detection.domain.logs.models import AttackPattern, LogVerdict, ThreatLevel
from cyber_threat_detection.domain.logs.parse import LogEntry, parse_log_text

logger = logging.getLogger(__name__)

MAX_DETAILS = 5
MAX_ATTEMPTS_PER_SECOND = 1.0
SINGLE_USER_MIN_LINES = 10
SINGLE_IP_MAX_ATTEMPTS = 10
TIMING_TOLERANCE_MS = 100.0
TIMING_MIN_INTERVALS = 5
HIGH_LINE_COUNT = 50
HIGH_IP_COUNT = 10
MEDIUM_LINE_COUNT = 20
MEDIUM_IP_COUNT = 5


def _describe_failure(entry: LogEntry) -> str:
    detail = f"Failed login attempt from {entry.ip or 'unknown IP'}"
    if entry.user:
        detail += f" for user {entry.user}"
    return detail


def _time_window_seconds(entries: list[LogEntry]) -> float:
    times = [entry.timestamp for entry in entries if entry.timestamp is not None]
    if len(times) < 2:
        return 0.0
    return (max(times) - min(times)).total_seconds()


def _intervals_ms(entries: list[LogEntry]) -> list[float]:
    times = [entry.timestamp for entry in entries if entry.timestamp is not None]
    return [
        (current - previous).total_seconds() * 1000.0
        for previous, current in zip(times, times[1:])
    ]


def _is_consistent_timing(intervals: list[float]) -> bool:
    if len(intervals) <= TIMING_MIN_INTERVALS:
        return False
    mean = sum(intervals) / len(intervals)
    return all(abs(item - mean) < TIMING_TOLERANCE_MS for item in intervals)


def _threat_level(patterns: list[AttackPattern], attempts: int, ip_count: int) -> ThreatLevel:
    if any(item.severity == "high" for item in patterns):
        return "High"
    if attempts > HIGH_LINE_COUNT or ip_count > HIGH_IP_COUNT:
        return "High"
    if attempts > MEDIUM_LINE_COUNT or ip_count > MEDIUM_IP_COUNT:
        return "Medium"
    return "Low"


class LogThreatScorer:
    """Detect brute-force structure in a single block of log lines."""

    def analyze(self, text: str) -> LogVerdict:
        entries = parse_log_text(text)
        attempts = len(entries)

        ip_attempts: Counter[str] = Counter()
        users: dict[str, None] = {}
        details: list[str] = []
        failed_logins = 0
        for entry in entries:
            if entry.ip:
                ip_attempts[entry.ip] += 1
            if entry.user:
                users.setdefault(entry.user, None)
            if entry.is_failed_login:
                failed_logins += 1
                if len(details) < MAX_DETAILS:
                    details.append(_describe_failure(entry))

        window = _time_window_seconds(entries)
        patterns: list[AttackPattern] = []

        if window > 0:
            rate = attempts / window
            if rate > MAX_ATTEMPTS_PER_SECOND:
                patterns.append(
                    AttackPattern(description=f"High frequency: {rate:.2f} attempts/second", severity="high")
                )

        if len(users) == 1 and attempts > SINGLE_USER_MIN_LINES:
            patterns.append(AttackPattern(description="Single user targeting detected", severity="high"))

        if ip_attempts:
            busiest = max(ip_attempts.values())
            if busiest > SINGLE_IP_MAX_ATTEMPTS:
                patterns.append(
                    AttackPattern(
                        description=f"Concentrated attacks: {busiest} attempts from single IP",
                        severity="high",
                    )
                )

        if _is_consistent_timing(_intervals_ms(entries)):
            patterns.append(
                AttackPattern(description="Consistent timing suggests automated attack", severity="high")
            )

        threat_level = _threat_level(patterns, attempts, len(ip_attempts))
        logger.debug(
            "logs scored: attempts=%d ips=%d window=%.1fs patterns=%d level=%s",
            attempts,
            len(ip_attempts),
            window,
            len(patterns),
            threat_level,
        )
        return LogVerdict(
            attempts=attempts,
            unique_ips=list(ip_attempts),
            time_window_seconds=window,
            threat_level=threat_level,
            patterns=patterns,
            details=details,
            unique_users=list(users),
            failed_logins=failed_logins,
            attempts_per_ip=dict(ip_attempts),
        )


_DEFAULT_SCORER = LogThreatScorer()


def analyze_logs(text: str) -> LogVerdict:
    return _DEFAULT_SCORER.analyze(text)
