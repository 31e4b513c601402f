"""Heuristic scoring engines."""

from cyber_threat_detection.analyzers.email import EmailThreatScorer, analyze_email
from cyber_threat_detection.analyzers.logs import LogThreatScorer, analyze_logs

__all__ = ["EmailThreatScorer", "LogThreatScorer", "analyze_email", "analyze_logs"]
