"""Text sources that feed raw input to the scorers."""

from cyber_threat_detection.sources.base import StaticTextSource, TextSource, load_text
from cyber_threat_detection.sources.url_fetch import (
    SafeFetchPolicy,
    UrlTextSource,
    html_to_text,
    policy_from_config,
    safe_fetch_text,
)

__all__ = [
    "SafeFetchPolicy",
    "StaticTextSource",
    "TextSource",
    "UrlTextSource",
    "html_to_text",
    "load_text",
    "policy_from_config",
    "safe_fetch_text",
]
