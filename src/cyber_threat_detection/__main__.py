"""CLI entrypoint for cyber_threat_detection."""

from __future__ import annotations

from cyber_threat_detection.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
