"""Heuristic phishing and brute-force login analyzers."""

from cyber_threat_detection.analyzers import (
    EmailThreatScorer,
    LogThreatScorer,
    analyze_email,
    analyze_logs,
)
from cyber_threat_detection.domain.email.models import EmailVerdict
from cyber_threat_detection.domain.logs.models import AttackPattern, LogVerdict

__version__ = "1.0.0"

__all__ = [
    "AttackPattern",
    "EmailThreatScorer",
    "EmailVerdict",
    "LogThreatScorer",
    "LogVerdict",
    "analyze_email",
    "analyze_logs",
]
