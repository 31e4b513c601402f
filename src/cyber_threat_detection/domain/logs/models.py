"""Log verdict models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

ThreatLevel = Literal["Low", "Medium", "High"]
Severity = Literal["low", "medium", "high"]


class AttackPattern(BaseModel):
    description: str
    severity: Severity


class LogVerdict(BaseModel):
    """Brute-force verdict for one analyzed block of log text."""

    attempts: int = 0
    unique_ips: list[str] = Field(default_factory=list)
    time_window_seconds: float = 0.0
    threat_level: ThreatLevel = "Low"
    patterns: list[AttackPattern] = Field(default_factory=list)
    details: list[str] = Field(default_factory=list)
    unique_users: list[str] = Field(default_factory=list)
    failed_logins: int = 0
    attempts_per_ip: dict[str, int] = Field(default_factory=dict)
