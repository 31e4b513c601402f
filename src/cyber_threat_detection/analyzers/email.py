"""Weighted-indicator phishing scorer for raw email text."""

from __future__ import annotations

import logging

from cyber_threat_detection.domain.email.models import EmailVerdict
from cyber_threat_detection.domain.email.rules import (
    INDICATOR_RULES,
    LEGITIMACY_DISCOUNT,
    LEGITIMACY_RULES,
    NO_FINDINGS_MESSAGE,
    IndicatorRule,
    LegitimacyRule,
)

logger = logging.getLogger(__name__)

SAFE_THRESHOLD = 40.0
LEGITIMACY_SCALE = 25.0


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


class EmailThreatScorer:
    """Score email text against fixed indicator and legitimacy rules."""

    def __init__(
        self,
        indicators: tuple[IndicatorRule, ...] = INDICATOR_RULES,
        legitimacy: tuple[LegitimacyRule, ...] = LEGITIMACY_RULES,
    ) -> None:
        self.indicators = indicators
        self.legitimacy = legitimacy
        self.total_weight = sum(rule.weight for rule in indicators)

    def analyze(self, text: str) -> EmailVerdict:
        body = text or ""
        weighted_matches = 0.0
        reasons: list[str] = []
        matches: list[str] = []
        triggered: list[str] = []

        for rule in self.indicators:
            found = rule.search(body)
            if found is None:
                continue
            weighted_matches += rule.weight
            reasons.append(rule.message)
            triggered.append(rule.id)
            if found:
                matches.append(f'"{found}" - {rule.message}')

        raw_confidence = 100.0 * weighted_matches / self.total_weight if self.total_weight else 0.0
        legitimacy_score = sum(
            LEGITIMACY_DISCOUNT for rule in self.legitimacy if rule.applies(body)
        )
        confidence = _clamp(raw_confidence - legitimacy_score * LEGITIMACY_SCALE)

        logger.debug(
            "email scored: rules=%s raw=%.2f legitimacy=%.2f confidence=%.2f",
            triggered,
            raw_confidence,
            legitimacy_score,
            confidence,
        )
        return EmailVerdict(
            safe=confidence < SAFE_THRESHOLD,
            confidence=confidence,
            reasons=reasons or [NO_FINDINGS_MESSAGE],
            matches=matches,
            triggered_rules=triggered,
            raw_confidence=raw_confidence,
            legitimacy_score=legitimacy_score,
        )


_DEFAULT_SCORER = EmailThreatScorer()


def analyze_email(text: str) -> EmailVerdict:
    return _DEFAULT_SCORER.analyze(text)
