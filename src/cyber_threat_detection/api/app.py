"""FastAPI entrypoint exposing both analyzers."""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException

from cyber_threat_detection.analyzers import analyze_email, analyze_logs
from cyber_threat_detection.config.settings import load_config
from cyber_threat_detection.core.errors import TextSourceError
from cyber_threat_detection.sources.base import StaticTextSource, TextSource
from cyber_threat_detection.sources.url_fetch import UrlTextSource, policy_from_config

logger = logging.getLogger(__name__)

app = FastAPI(title="cyber-threat-detection")


def _source_from_payload(payload: dict[str, object]) -> TextSource:
    text = payload.get("text")
    if isinstance(text, str):
        return StaticTextSource(text)
    url = payload.get("url")
    if isinstance(url, str) and url.strip():
        cfg, _ = load_config()
        return UrlTextSource(url, policy_from_config(cfg))
    raise HTTPException(status_code=422, detail="payload requires 'text' or 'url'")


def _read_payload_text(payload: dict[str, object]) -> str:
    source = _source_from_payload(payload)
    try:
        return source.read()
    except TextSourceError as exc:
        logger.error("fetch failed for %s: %s", source.describe(), exc)
        raise HTTPException(status_code=502, detail=f"could not fetch input: {exc}") from exc


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/analyze/email")
def analyze_email_route(payload: dict[str, object]) -> dict[str, object]:
    return analyze_email(_read_payload_text(payload)).model_dump()


@app.post("/analyze/logs")
def analyze_logs_route(payload: dict[str, object]) -> dict[str, object]:
    return analyze_logs(_read_payload_text(payload)).model_dump()
