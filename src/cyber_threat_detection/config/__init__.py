"""Configuration loading."""

from cyber_threat_detection.config.settings import AppConfig, load_config

__all__ = ["AppConfig", "load_config"]
