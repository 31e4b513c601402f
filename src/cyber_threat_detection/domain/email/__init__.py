"""Email indicator rules and verdict models."""

from cyber_threat_detection.domain.email.models import EmailVerdict
from cyber_threat_detection.domain.email.rules import (
    INDICATOR_RULES,
    LEGITIMACY_RULES,
    NO_FINDINGS_MESSAGE,
    IndicatorRule,
    LegitimacyRule,
)

__all__ = [
    "EmailVerdict",
    "INDICATOR_RULES",
    "LEGITIMACY_RULES",
    "NO_FINDINGS_MESSAGE",
    "IndicatorRule",
    "LegitimacyRule",
]
