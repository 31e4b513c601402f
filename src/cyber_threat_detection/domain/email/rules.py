"""Weighted phishing indicator and legitimacy rule tables.

Rules are evaluated in declaration order; that order fixes the order of
``reasons`` and ``matches`` in every verdict. Every rule scans its input in
linear time, so arbitrarily long bodies stay cheap to score.
"""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Callable

NO_FINDINGS_MESSAGE = "No suspicious patterns detected"
LEGITIMACY_DISCOUNT = 0.2
MIN_SENTENCE_BODY = 10


@dataclass(frozen=True)
class IndicatorRule:
    id: str
    pattern: re.Pattern[str]
    weight: float
    message: str
    follow: re.Pattern[str] | None = None

    def search(self, text: str) -> str | None:
        """Return the matched substring, or ``None`` when the rule does not fire.

        With ``follow`` set, the rule fires on the first line where ``pattern``
        is later followed by ``follow``; the match runs from the first
        ``pattern`` hit to the last ``follow`` hit on that line.
        """

        if self.follow is None:
            found = self.pattern.search(text)
            return found.group(0) if found else None

        for line in text.split("\n"):
            lead = self.pattern.search(line)
            if not lead:
                continue
            tail = None
            for tail in self.follow.finditer(line, lead.end()):
                pass
            if tail is not None:
                return line[lead.start() : tail.end()]
        return None


@dataclass(frozen=True)
class LegitimacyRule:
    id: str
    check: Callable[[str], object]

    def applies(self, text: str) -> bool:
        return bool(self.check(text))


def _rule(
    rule_id: str,
    pattern: str,
    weight: float,
    message: str,
    follow: str | None = None,
) -> IndicatorRule:
    return IndicatorRule(
        id=rule_id,
        pattern=re.compile(pattern, re.IGNORECASE),
        weight=weight,
        message=message,
        follow=re.compile(follow, re.IGNORECASE) if follow else None,
    )


INDICATOR_RULES: tuple[IndicatorRule, ...] = (
    _rule(
        "urgency",
        r"\b(urgent|immediate|asap|act now|limited time|expires?|deadline)\b",
        0.25,
        "Contains urgency indicators",
    ),
    _rule(
        "formatting",
        # Shouting is a case-sensitive capitals run across two or more words.
        r"((?-i:\b[A-Z]{5,}(?:\s+[A-Z]{2,})+\b)"
        r"|(?-i:\b[A-Z]{2,}\s+[A-Z]{5,}\b)"
        r"|!{2,}|(?<!\d)\d+\s*%\s*off|\$\s*\d+\s*prize)",
        0.2,
        "Contains suspicious formatting or promotional content",
    ),
    _rule(
        "sensitive_info",
        r"\b(password|verify|account|ssn|social security|credit card|bank|login)\b",
        0.3,
        "Requests sensitive information",
    ),
    _rule(
        "generic_greeting",
        r"\b(dear\s+(sir|madam|user|customer|valued\s+customer|account\s+holder))\b",
        0.15,
        "Uses generic greeting",
    ),
    _rule(
        "suspicious_links",
        r"(click\s+here|verify\s+now|login\s+to|sign\s+in\s+at|update\s+your)",
        0.25,
        "Contains suspicious call-to-action phrases",
    ),
    _rule(
        "threat_language",
        r"\b(suspend|disable|verify|cancel|terminate|locked|restricted)\b",
        0.3,
        "Contains threatening language about account status",
        follow=r"\b(account|access)\b",
    ),
)

TOTAL_INDICATOR_WEIGHT = sum(rule.weight for rule in INDICATOR_RULES)

# Case-sensitive: a line opening with a capital letter.
_LINE_START_CAPITAL = re.compile(r"^[A-Z]", re.MULTILINE)
_WITHOUT_EXCLAIM_OR_QUESTION = re.compile(r"[^!?]+")


def has_proper_sentence(text: str) -> bool:
    """True when a line opens with a capital letter and reaches a period after
    at least ten more characters, none of them ``!`` or ``?``."""

    for stretch in _WITHOUT_EXCLAIM_OR_QUESTION.finditer(text):
        start = _LINE_START_CAPITAL.search(text, stretch.start(), stretch.end())
        if start is None:
            continue
        if text.rfind(".", start.start() + MIN_SENTENCE_BODY + 1, stretch.end()) != -1:
            return True
    return False


LEGITIMACY_RULES: tuple[LegitimacyRule, ...] = (
    LegitimacyRule("proper_formatting", has_proper_sentence),
    LegitimacyRule(
        "personalized_greeting",
        re.compile(r"\b(hi|hello|dear)\s+[A-Z][a-z]+\b", re.IGNORECASE).search,
    ),
    LegitimacyRule(
        "business_signature",
        re.compile(r"regards,?\s+[A-Z][a-z]+|sincerely,?\s+[A-Z][a-z]+", re.IGNORECASE).search,
    ),
)
