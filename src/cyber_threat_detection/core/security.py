"""Network boundary checks for the URL fetch collaborator."""

from __future__ import annotations

import ipaddress
import socket
from urllib.parse import urlparse


def is_private_or_local_ip(value: str) -> bool:
    try:
        ip = ipaddress.ip_address(value)
    except ValueError:
        return False
    return (
        ip.is_private
        or ip.is_loopback
        or ip.is_link_local
        or ip.is_reserved
        or ip.is_multicast
        or ip.is_unspecified
    )


def check_network_target(url: str, allow_private: bool) -> tuple[bool, str | None]:
    """Return ``(ok, blocked_reason)`` for a candidate fetch target."""

    try:
        parsed = urlparse(url.strip())
        host = parsed.hostname or ""
    except ValueError:
        return False, "invalid_url"
    if parsed.scheme not in {"http", "https"}:
        return False, "unsupported_scheme"
    if not host:
        return False, "missing_host"
    if allow_private:
        return True, None

    try:
        infos = socket.getaddrinfo(host, None)
    except UnicodeError:
        return False, "invalid_url"
    except socket.gaierror:
        return False, "dns_resolution_failed"

    for entry in infos:
        addr = entry[4][0]
        if is_private_or_local_ip(addr):
            return False, "private_network_blocked"
    return True, None
