"""Config loader from env + yaml."""

from __future__ import annotations

from pathlib import Path
import os
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from cyber_threat_detection.core.errors import ConfigError

PACKAGE_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_CONFIG_PATH = PACKAGE_ROOT / "config" / "defaults.yaml"
ENV_PREFIX = "CYBER_THREAT_"


class AppConfig(BaseModel):

    log_level: str = Field(default="INFO")
    enable_url_fetch: bool = Field(default=True)
    fetch_timeout_s: float = Field(default=5.0)
    fetch_max_redirects: int = Field(default=3)
    fetch_max_bytes: int = Field(default=1_000_000)
    allow_private_network: bool = Field(default=False)
    fetch_user_agent: str = Field(default="CyberThreatDetection/1.0")
    gradio_share: bool = Field(default=False)
    default_config_path: str = Field(default=str(DEFAULT_CONFIG_PATH))


def load_yaml(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    if not p.exists():
        return {}
    try:
        payload = yaml.safe_load(p.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid config file {p}: {exc}") from exc
    return payload if isinstance(payload, dict) else {}


def _pick_env(name: str, fallback: Any) -> Any:
    value = os.getenv(f"{ENV_PREFIX}{name}")
    return value if value not in (None, "") else fallback


def _parse_int(raw: Any, fallback: int) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return fallback
    return value if value > 0 else fallback


def _parse_float(raw: Any, fallback: float) -> float:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return fallback
    return value if value > 0 else fallback


def _parse_bool(raw: Any, fallback: bool) -> bool:
    if isinstance(raw, bool):
        return raw
    if raw is None:
        return fallback
    value = str(raw).strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return fallback


def _parse_str(raw: Any, fallback: str) -> str:
    value = str(raw if raw is not None else "").strip()
    return value or fallback


def _resolve_default_config_path(path: str | Path | None) -> Path:
    if path is not None:
        return Path(path)
    env_default_path = os.getenv(f"{ENV_PREFIX}DEFAULT_CONFIG_PATH")
    if env_default_path:
        return Path(env_default_path)
    return DEFAULT_CONFIG_PATH


def load_config(path: str | Path | None = None) -> tuple[AppConfig, dict[str, Any]]:
    default_path = _resolve_default_config_path(path)
    merged = load_yaml(default_path)
    defaults = AppConfig()

    payload = {
        "log_level": _parse_str(
            _pick_env("LOG_LEVEL", merged.get("log_level", defaults.log_level)),
            defaults.log_level,
        ).upper(),
        "enable_url_fetch": _parse_bool(
            _pick_env("ENABLE_URL_FETCH", merged.get("enable_url_fetch", defaults.enable_url_fetch)),
            defaults.enable_url_fetch,
        ),
        "fetch_timeout_s": _parse_float(
            _pick_env("FETCH_TIMEOUT_S", merged.get("fetch_timeout_s", defaults.fetch_timeout_s)),
            defaults.fetch_timeout_s,
        ),
        "fetch_max_redirects": _parse_int(
            _pick_env("FETCH_MAX_REDIRECTS", merged.get("fetch_max_redirects", defaults.fetch_max_redirects)),
            defaults.fetch_max_redirects,
        ),
        "fetch_max_bytes": _parse_int(
            _pick_env("FETCH_MAX_BYTES", merged.get("fetch_max_bytes", defaults.fetch_max_bytes)),
            defaults.fetch_max_bytes,
        ),
        "allow_private_network": _parse_bool(
            _pick_env(
                "ALLOW_PRIVATE_NETWORK",
                merged.get("allow_private_network", defaults.allow_private_network),
            ),
            defaults.allow_private_network,
        ),
        "fetch_user_agent": _parse_str(
            _pick_env("FETCH_USER_AGENT", merged.get("fetch_user_agent", defaults.fetch_user_agent)),
            defaults.fetch_user_agent,
        ),
        "gradio_share": _parse_bool(
            _pick_env("GRADIO_SHARE", merged.get("gradio_share", defaults.gradio_share)),
            defaults.gradio_share,
        ),
        "default_config_path": str(default_path),
    }

    try:
        cfg = AppConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
    return cfg, merged
