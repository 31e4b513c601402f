"""Text source contract.

The scorers never touch the network. Callers resolve a ``TextSource`` to a
string first, and a failed source leaves whatever text they already had.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
import logging

from cyber_threat_detection.core.errors import TextSourceError

logger = logging.getLogger(__name__)


class TextSource(ABC):
    @abstractmethod
    def read(self) -> str:
        """Return the source text or raise ``TextSourceError``."""

    def describe(self) -> str:
        return type(self).__name__


class StaticTextSource(TextSource):
    def __init__(self, text: str) -> None:
        self.text = text

    def read(self) -> str:
        return self.text

    def describe(self) -> str:
        return "inline text"


def load_text(source: TextSource, fallback: str = "") -> str:
    try:
        return source.read()
    except TextSourceError as exc:
        logger.error("failed to load text from %s: %s", source.describe(), exc)
        return fallback
