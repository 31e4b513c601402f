"""Plain-text rendering of verdicts for the CLI and UI."""

from __future__ import annotations

from cyber_threat_detection.domain.email.models import EmailVerdict
from cyber_threat_detection.domain.logs.models import LogVerdict

EMAIL_CRITERIA: tuple[tuple[str, str, tuple[str, ...]], ...] = (
    ("Urgency", "Messages creating pressure to act quickly", ("Act now!", "Immediate action required", "Urgent response needed")),
    ("Poor Grammar", "Unusual formatting or grammatical errors", ("ALL CAPS", "Multiple!!!", "Broken sentences")),
    ("Sensitive Information", "Requests for personal or confidential data", ("Verify password", "Confirm SSN", "Update account details")),
    ("Generic Greeting", "Non-specific or impersonal salutations", ("Dear Sir/Madam", "Dear User", "Dear Customer")),
)

BRUTE_FORCE_CRITERIA: tuple[tuple[str, str, tuple[str, ...]], ...] = (
    ("Frequency", "Number of attempts in a time window", ("More than 1 attempt/second", "Rapid successive tries")),
    ("IP Patterns", "Suspicious IP address behavior", ("Multiple IPs", "More than 10 attempts from one IP")),
    ("Time Analysis", "Temporal patterns of attempts", ("Consistent intervals", "Automated timing")),
    ("Target Analysis", "Attack targeting patterns", ("Single user focus", "Sequential attempts")),
)

THREAT_LEVEL_PROGRESS = {"High": 100, "Medium": 50, "Low": 25}
PROGRESS_WIDTH = 20


def format_progress(percent: int, width: int = PROGRESS_WIDTH) -> str:
    filled = round(width * percent / 100)
    return f"[{'#' * filled}{'-' * (width - filled)}] {percent}%"


def format_criteria(criteria: tuple[tuple[str, str, tuple[str, ...]], ...]) -> str:
    lines = []
    for title, description, examples in criteria:
        lines.append(f"**{title}**: {description}")
        lines.append(f"  e.g. {', '.join(examples)}")
    return "\n".join(lines)


def format_email_report(verdict: EmailVerdict) -> str:
    headline = "Likely Safe" if verdict.safe else "Potential Threat"
    lines = [
        f"{headline} ({round(verdict.confidence)}% threat confidence)",
        "",
        "Analysis Results:",
        *(f"- {reason}" for reason in verdict.reasons),
    ]
    if verdict.matches:
        lines.extend(["", "Detected Patterns:", *(f"- {match}" for match in verdict.matches)])
    return "\n".join(lines)


def format_log_report(verdict: LogVerdict) -> str:
    lines = [
        f"{verdict.threat_level} Threat Level ({verdict.attempts} attempts detected)",
        format_progress(THREAT_LEVEL_PROGRESS[verdict.threat_level]),
        f"Unique IPs: {len(verdict.unique_ips)}",
        f"Time Window: {verdict.time_window_seconds:.1f}s",
    ]
    if verdict.patterns:
        lines.extend(
            ["", "Detected Patterns:"]
            + [f"- [{item.severity.upper()}] {item.description}" for item in verdict.patterns]
        )
    lines.extend(["", "Recent Events:"])
    lines.extend(f"- {detail}" for detail in verdict.details)
    if not verdict.details:
        lines.append("- none")
    return "\n".join(lines)
