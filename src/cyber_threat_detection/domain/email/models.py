"""Email verdict models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class EmailVerdict(BaseModel):
    """Phishing verdict for one analyzed email body."""

    safe: bool
    confidence: float = Field(ge=0.0, le=100.0)
    reasons: list[str] = Field(default_factory=list)
    matches: list[str] = Field(default_factory=list)
    triggered_rules: list[str] = Field(default_factory=list)
    raw_confidence: float = 0.0
    legitimacy_score: float = 0.0
