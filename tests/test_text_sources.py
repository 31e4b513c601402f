from __future__ import annotations

import io

from cyber_threat_detection.core.errors import TextSourceError
from cyber_threat_detection.core.security import check_network_target, is_private_or_local_ip
from cyber_threat_detection.sources import url_fetch
from cyber_threat_detection.sources.base import StaticTextSource, TextSource, load_text
from cyber_threat_detection.sources.url_fetch import (
    SafeFetchPolicy,
    UrlTextSource,
    html_to_text,
    safe_fetch_text,
)


class _BrokenSource(TextSource):
    def read(self) -> str:
        raise TextSourceError("boom", status="network_error")


class _FakeResponse:
    def __init__(self, status: int, headers: dict[str, str], body: bytes = b"") -> None:
        self.status = status
        self.headers = headers
        self._body = io.BytesIO(body)

    def read(self, size: int = -1) -> bytes:
        return self._body.read(size)

    def __enter__(self) -> "_FakeResponse":
        return self

    def __exit__(self, *exc: object) -> None:
        return None


class _FakeOpener:
    def __init__(self, responses: list[_FakeResponse]) -> None:
        self.responses = responses
        self.requested: list[str] = []

    def open(self, req, timeout: float):  # type: ignore[no-untyped-def]
        self.requested.append(req.full_url)
        return self.responses.pop(0)


def test_static_source_returns_text() -> None:
    assert load_text(StaticTextSource("hello")) == "hello"


def test_failed_source_keeps_previous_text() -> None:
    assert load_text(_BrokenSource(), fallback="previous") == "previous"


def test_safe_fetch_rejects_empty_and_disabled() -> None:
    assert safe_fetch_text("  ")["blocked_reason"] == "empty_url"
    result = safe_fetch_text("https://example.com", SafeFetchPolicy(enabled=False))
    assert result["status"] == "skipped"


def test_safe_fetch_rejects_unsupported_scheme() -> None:
    result = safe_fetch_text("ftp://example.com/logs.txt")
    assert result == {
        "url": "ftp://example.com/logs.txt",
        "status": "blocked",
        "blocked_reason": "unsupported_scheme",
    }


def test_private_targets_are_blocked_by_default() -> None:
    assert is_private_or_local_ip("127.0.0.1") is True
    assert is_private_or_local_ip("8.8.8.8") is False
    assert is_private_or_local_ip("not-an-ip") is False
    assert check_network_target("http://127.0.0.1/logs", allow_private=False) == (
        False,
        "private_network_blocked",
    )
    assert check_network_target("http://127.0.0.1/logs", allow_private=True) == (True, None)


def test_fetch_reduces_html_to_visible_text(monkeypatch) -> None:
    body = b"<html><head><style>p{}</style><script>var x=1;</script></head><body><p>Dear Customer</p></body></html>"
    opener = _FakeOpener([_FakeResponse(200, {"Content-Type": "text/html; charset=utf-8"}, body)])
    monkeypatch.setattr(url_fetch, "build_opener", lambda *handlers: opener)
    result = url_fetch._fetch_internal("https://mail.example/msg", SafeFetchPolicy())
    assert result["status"] == "ok"
    assert result["text"] == "Dear Customer"
    assert result["truncated"] is False


def test_fetch_truncates_large_bodies(monkeypatch) -> None:
    opener = _FakeOpener([_FakeResponse(200, {"Content-Type": "text/plain"}, b"a" * 50)])
    monkeypatch.setattr(url_fetch, "build_opener", lambda *handlers: opener)
    result = url_fetch._fetch_internal("https://logs.example/auth.log", SafeFetchPolicy(max_bytes=10))
    assert result["text"] == "a" * 10
    assert result["truncated"] is True


def test_redirect_to_private_network_is_blocked(monkeypatch) -> None:
    opener = _FakeOpener([_FakeResponse(302, {"Location": "http://127.0.0.1/admin"})])
    monkeypatch.setattr(url_fetch, "build_opener", lambda *handlers: opener)
    result = url_fetch._fetch_internal("https://logs.example/auth.log", SafeFetchPolicy())
    assert result["status"] == "blocked"
    assert result["blocked_reason"] == "private_network_blocked"
    assert result["redirect_chain"] == ["http://127.0.0.1/admin"]


def test_http_error_status_is_reported(monkeypatch) -> None:
    opener = _FakeOpener([_FakeResponse(404, {"Content-Type": "text/plain"}, b"missing")])
    monkeypatch.setattr(url_fetch, "build_opener", lambda *handlers: opener)
    result = url_fetch._fetch_internal("https://logs.example/auth.log", SafeFetchPolicy())
    assert result["status"] == "http_error"
    assert result["status_code"] == 404


def test_url_source_raises_on_failed_fetch(monkeypatch) -> None:
    monkeypatch.setattr(
        url_fetch,
        "safe_fetch_text",
        lambda url, policy: {"url": url, "status": "network_error"},
    )
    source = UrlTextSource("https://logs.example/auth.log")
    try:
        source.read()
    except TextSourceError as exc:
        assert exc.status == "network_error"
    else:
        raise AssertionError("expected TextSourceError")
    assert load_text(source, fallback="kept") == "kept"


def test_url_source_returns_fetched_text(monkeypatch) -> None:
    monkeypatch.setattr(
        url_fetch,
        "safe_fetch_text",
        lambda url, policy: {"url": url, "status": "ok", "text": "10:00:00 Failed login"},
    )
    assert UrlTextSource("https://logs.example/auth.log").read() == "10:00:00 Failed login"


def test_html_to_text_keeps_fragments_on_lines() -> None:
    assert html_to_text("<p>Hi  John,</p><p>Regards, Maria</p>") == "Hi John,\nRegards, Maria"


class _ResetResponse(_FakeResponse):
    def read(self, size: int = -1) -> bytes:
        raise ConnectionResetError("connection reset by peer")


def test_malformed_urls_are_rejected(monkeypatch) -> None:
    assert check_network_target("http://[::1", allow_private=False) == (False, "invalid_url")

    def _idna_failure(host, port):  # type: ignore[no-untyped-def]
        raise UnicodeError("encoding with 'idna' codec failed (UnicodeError: label empty or too long)")

    monkeypatch.setattr("socket.getaddrinfo", _idna_failure)
    assert check_network_target("http://a..b/", allow_private=False) == (False, "invalid_url")


def test_malformed_url_source_keeps_previous_text() -> None:
    for url in ("http://[::1", "http://a..b/logs"):
        source = UrlTextSource(url)
        try:
            source.read()
        except TextSourceError as exc:
            assert exc.status == "blocked"
        else:
            raise AssertionError("expected TextSourceError")
        assert load_text(source, fallback="kept") == "kept"


def test_connection_reset_mid_body_is_network_error(monkeypatch) -> None:
    opener = _FakeOpener([_ResetResponse(200, {"Content-Type": "text/plain"})])
    monkeypatch.setattr(url_fetch, "build_opener", lambda *handlers: opener)
    result = url_fetch._fetch_internal("https://logs.example/auth.log", SafeFetchPolicy())
    assert result["status"] == "network_error"
