"""CLI entrypoints for the email and log analyzers."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys
from typing import Callable, Sequence

from pydantic import BaseModel

from cyber_threat_detection.analyzers import analyze_email, analyze_logs
from cyber_threat_detection.config.settings import AppConfig, load_config
from cyber_threat_detection.core.errors import TextSourceError
from cyber_threat_detection.core.logging import configure_logging
from cyber_threat_detection.render import format_email_report, format_log_report
from cyber_threat_detection.sources.base import StaticTextSource, TextSource
from cyber_threat_detection.sources.url_fetch import UrlTextSource, policy_from_config

logger = logging.getLogger(__name__)

EXIT_INPUT_ERROR = 2


def _resolve_source(args: argparse.Namespace, cfg: AppConfig) -> TextSource:
    if args.url:
        return UrlTextSource(args.url, policy_from_config(cfg))
    if args.file:
        if args.file == "-":
            return StaticTextSource(sys.stdin.read())
        return StaticTextSource(Path(args.file).read_text(encoding="utf-8", errors="replace"))
    return StaticTextSource(args.text or "")


def _emit(verdict: BaseModel, output_format: str, report: Callable[..., str]) -> None:
    if output_format == "json":
        print(json.dumps(verdict.model_dump(), indent=2, ensure_ascii=True))
        return
    print(report(verdict))


def _run_analysis(args: argparse.Namespace, cfg: AppConfig) -> int:
    try:
        text = _resolve_source(args, cfg).read()
    except (TextSourceError, OSError) as exc:
        logger.error("could not read input: %s", exc)
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    if args.command == "email":
        _emit(analyze_email(text), args.format, format_email_report)
    else:
        _emit(analyze_logs(text), args.format, format_log_report)
    return 0


def _run_ui(args: argparse.Namespace, cfg: AppConfig) -> int:
    from cyber_threat_detection.ui.gradio_app import build

    build(cfg).launch(share=args.share or cfg.gradio_share)
    return 0


def _add_input_arguments(parser: argparse.ArgumentParser, noun: str) -> None:
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--text", help=f"Raw {noun} text to analyze.")
    group.add_argument("--file", help=f"Path to a file with {noun} text ('-' for stdin).")
    group.add_argument("--url", help=f"Fetch {noun} text from a URL.")
    parser.add_argument(
        "--format",
        choices=["report", "json"],
        default="report",
        help="Output format for the verdict.",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cyber-threat-detection")
    parser.add_argument("--config", help="Path to a YAML config file.")
    parser.add_argument("--log-level", help="Override the configured log level.")
    sub = parser.add_subparsers(dest="command", required=True)

    email = sub.add_parser("email", help="Score email text for phishing indicators.")
    _add_input_arguments(email, "email")
    email.set_defaults(func=_run_analysis)

    logs = sub.add_parser("logs", help="Score authentication logs for brute-force indicators.")
    _add_input_arguments(logs, "log")
    logs.set_defaults(func=_run_analysis)

    ui = sub.add_parser("ui", help="Launch the Gradio interface.")
    ui.add_argument("--share", action="store_true", help="Create a public Gradio share link.")
    ui.set_defaults(func=_run_ui)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    cfg, _ = load_config(args.config)
    configure_logging(args.log_level or cfg.log_level)
    return int(args.func(args, cfg))
