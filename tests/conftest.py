from __future__ import annotations

import pytest


@pytest.fixture
def brute_force_log() -> str:
    lines = [
        f"2024-03-01 10:00:{second:02d} sshd: Failed login from 10.0.0.5 user:admin"
        for second in range(15)
    ]
    return "\n".join(lines)


@pytest.fixture
def quiet_log() -> str:
    return "\n".join(
        [
            "Accepted password for alice from 192.168.1.10",
            "Accepted password for bob from 192.168.1.11",
            "Session opened for carol from 192.168.1.12",
        ]
    )
