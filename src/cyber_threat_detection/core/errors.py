"""Custom exceptions for cyber_threat_detection."""

from __future__ import annotations


class ThreatDetectionError(Exception):
    """Base exception for application-level errors."""


class ConfigError(ThreatDetectionError):
    """Raised when configuration cannot be loaded or validated."""


class TextSourceError(ThreatDetectionError):
    """Raised when a text source cannot supply content."""

    def __init__(self, message: str, *, status: str = "error", reason: str | None = None) -> None:
        super().__init__(message)
        self.status = status
        self.reason = reason
