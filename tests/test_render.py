from __future__ import annotations

from cyber_threat_detection import analyze_email, analyze_logs
from cyber_threat_detection.render import (
    EMAIL_CRITERIA,
    format_criteria,
    format_email_report,
    format_log_report,
    format_progress,
)


def test_email_report_lists_reasons_and_matches() -> None:
    report = format_email_report(analyze_email("Act now: verify your password or your account is locked"))
    assert report.startswith("Potential Threat (")
    assert "- Requests sensitive information" in report
    assert 'Detected Patterns:\n- "Act now" - Contains urgency indicators' in report


def test_safe_email_report_has_no_pattern_section() -> None:
    report = format_email_report(analyze_email(""))
    assert report.startswith("Likely Safe (0% threat confidence)")
    assert "Detected Patterns" not in report


def test_log_report(brute_force_log: str, quiet_log: str) -> None:
    report = format_log_report(analyze_logs(brute_force_log))
    assert report.startswith("High Threat Level (15 attempts detected)")
    assert "Time Window: 14.0s" in report
    assert "- [HIGH] Single user targeting detected" in report

    quiet = format_log_report(analyze_logs(quiet_log))
    assert "Detected Patterns" not in quiet
    assert quiet.endswith("Recent Events:\n- none")


def test_criteria_render_every_title() -> None:
    text = format_criteria(EMAIL_CRITERIA)
    for title, _, _ in EMAIL_CRITERIA:
        assert f"**{title}**" in text


def test_log_report_shows_threat_level_progress(brute_force_log: str, quiet_log: str) -> None:
    high = format_log_report(analyze_logs(brute_force_log)).splitlines()
    assert high[1] == "[####################] 100%"
    low = format_log_report(analyze_logs(quiet_log)).splitlines()
    assert low[0].startswith("Low Threat Level")
    assert low[1] == "[#####---------------] 25%"
    assert format_progress(50) == "[##########----------] 50%"
