"""Safe URL fetch for the fetch-from-URL convenience."""

from __future__ import annotations

from dataclasses import dataclass
from html.parser import HTMLParser
from http.client import HTTPException
import logging
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.parse import urljoin
from urllib.request import HTTPErrorProcessor, Request, build_opener

from cyber_threat_detection.config.settings import AppConfig
from cyber_threat_detection.core.errors import TextSourceError
from cyber_threat_detection.core.security import check_network_target
from cyber_threat_detection.sources.base import TextSource

logger = logging.getLogger(__name__)

REDIRECT_STATUSES = {301, 302, 303, 307, 308}


@dataclass
class SafeFetchPolicy:
    enabled: bool = True
    timeout_s: float = 5.0
    max_redirects: int = 3
    max_bytes: int = 1_000_000
    allow_private_network: bool = False
    user_agent: str = "CyberThreatDetection/1.0"


def policy_from_config(cfg: AppConfig) -> SafeFetchPolicy:
    return SafeFetchPolicy(
        enabled=cfg.enable_url_fetch,
        timeout_s=cfg.fetch_timeout_s,
        max_redirects=cfg.fetch_max_redirects,
        max_bytes=cfg.fetch_max_bytes,
        allow_private_network=cfg.allow_private_network,
        user_agent=cfg.fetch_user_agent,
    )


class _NoRedirect(HTTPErrorProcessor):
    def http_response(self, request, response):  # type: ignore[no-untyped-def]
        return response

    https_response = http_response


class _VisibleTextParser(HTMLParser):
    def __init__(self) -> None:
        super().__init__()
        self.lines: list[str] = []
        self._skip_depth = 0

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag.lower() in {"script", "style"}:
            self._skip_depth += 1

    def handle_endtag(self, tag: str) -> None:
        if tag.lower() in {"script", "style"} and self._skip_depth:
            self._skip_depth -= 1

    def handle_data(self, data: str) -> None:
        if self._skip_depth:
            return
        clean = " ".join(data.split())
        if clean:
            self.lines.append(clean)


def html_to_text(html: str) -> str:
    """Reduce an HTML page to its visible text, one fragment per line."""

    parser = _VisibleTextParser()
    parser.feed(html or "")
    parser.close()
    return "\n".join(parser.lines)


def _read_body(response, max_bytes: int) -> tuple[bytes, bool]:  # type: ignore[no-untyped-def]
    chunks: list[bytes] = []
    total = 0
    truncated = False
    while True:
        block = response.read(min(65536, max_bytes - total + 1))
        if not block:
            break
        chunks.append(block)
        total += len(block)
        if total > max_bytes:
            truncated = True
            break
    data = b"".join(chunks)
    if truncated:
        data = data[:max_bytes]
    return data, truncated


def _charset(content_type: str) -> str:
    for part in content_type.split(";")[1:]:
        key, _, value = part.strip().partition("=")
        if key.lower() == "charset" and value:
            return value.strip().strip('"')
    return "utf-8"


def _fetch_internal(url: str, cfg: SafeFetchPolicy) -> dict[str, Any]:
    opener = build_opener(_NoRedirect())
    redirect_chain: list[str] = []
    current = url
    final_status = 0

    for _ in range(cfg.max_redirects + 1):
        req = Request(current, method="GET", headers={"User-Agent": cfg.user_agent})
        try:
            with opener.open(req, timeout=cfg.timeout_s) as response:
                status = int(getattr(response, "status", 200))
                final_status = status
                headers = response.headers
                location = headers.get("Location")
                if location and status in REDIRECT_STATUSES:
                    next_url = urljoin(current, location)
                    redirect_chain.append(next_url)
                    current = next_url
                    ok, reason = check_network_target(current, cfg.allow_private_network)
                    if not ok:
                        return {
                            "url": url,
                            "final_url": current,
                            "redirect_chain": redirect_chain,
                            "status": "blocked",
                            "blocked_reason": reason,
                        }
                    continue

                if status >= 400:
                    return {
                        "url": url,
                        "final_url": current,
                        "redirect_chain": redirect_chain,
                        "status": "http_error",
                        "status_code": status,
                    }

                content_type = (headers.get("Content-Type") or "").lower()
                raw, truncated = _read_body(response, cfg.max_bytes)
                try:
                    text = raw.decode(_charset(content_type), errors="replace")
                except LookupError:
                    text = raw.decode("utf-8", errors="replace")
                if "html" in content_type:
                    text = html_to_text(text)
                return {
                    "url": url,
                    "final_url": current,
                    "redirect_chain": redirect_chain,
                    "status": "ok",
                    "status_code": status,
                    "content_type": content_type,
                    "truncated": truncated,
                    "text": text,
                }
        except HTTPError as exc:
            return {
                "url": url,
                "final_url": current,
                "redirect_chain": redirect_chain,
                "status": "http_error",
                "status_code": int(exc.code),
            }
        except TimeoutError:
            return {
                "url": url,
                "final_url": current,
                "redirect_chain": redirect_chain,
                "status": "timeout",
            }
        except (URLError, HTTPException, OSError):
            # Mid-body resets and truncated reads land here too.
            return {
                "url": url,
                "final_url": current,
                "redirect_chain": redirect_chain,
                "status": "network_error",
            }
        except ValueError:
            return {
                "url": url,
                "final_url": current,
                "redirect_chain": redirect_chain,
                "status": "blocked",
                "blocked_reason": "invalid_url",
            }
    return {
        "url": url,
        "final_url": current,
        "redirect_chain": redirect_chain,
        "status": "blocked",
        "blocked_reason": "redirect_limit_exceeded",
        "status_code": final_status,
    }


def safe_fetch_text(url: str, policy: SafeFetchPolicy | None = None) -> dict[str, Any]:
    cfg = policy or SafeFetchPolicy()
    clean_url = (url or "").strip()
    if not clean_url:
        return {"url": clean_url, "status": "blocked", "blocked_reason": "empty_url"}
    if not cfg.enabled:
        return {"url": clean_url, "status": "skipped", "blocked_reason": "network_fetch_disabled"}

    ok, reason = check_network_target(clean_url, cfg.allow_private_network)
    if not ok:
        return {"url": clean_url, "status": "blocked", "blocked_reason": reason}
    return _fetch_internal(clean_url, cfg)


class UrlTextSource(TextSource):
    def __init__(self, url: str, policy: SafeFetchPolicy | None = None) -> None:
        self.url = url
        self.policy = policy or SafeFetchPolicy()

    def describe(self) -> str:
        return self.url

    def read(self) -> str:
        result = safe_fetch_text(self.url, self.policy)
        status = str(result.get("status", "error"))
        if status != "ok":
            reason = result.get("blocked_reason") or result.get("status_code")
            raise TextSourceError(
                f"fetch {status}" + (f" ({reason})" if reason else ""),
                status=status,
                reason=str(reason) if reason is not None else None,
            )
        if result.get("truncated"):
            logger.warning("fetched content from %s truncated to %d bytes", self.url, self.policy.max_bytes)
        return str(result.get("text", ""))
