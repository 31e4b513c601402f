"""Gradio app entrypoint."""

from __future__ import annotations

import gradio as gr

from cyber_threat_detection.analyzers import analyze_email, analyze_logs
from cyber_threat_detection.config.settings import AppConfig, load_config
from cyber_threat_detection.core.logging import configure_logging
from cyber_threat_detection.render import (
    BRUTE_FORCE_CRITERIA,
    EMAIL_CRITERIA,
    format_criteria,
    format_email_report,
    format_log_report,
)
from cyber_threat_detection.sources.base import load_text
from cyber_threat_detection.sources.url_fetch import SafeFetchPolicy, UrlTextSource, policy_from_config


def _fetch_into(url: str, current: str, policy: SafeFetchPolicy) -> str:
    if not (url or "").strip():
        return current
    return load_text(UrlTextSource(url, policy), fallback=current)


def _analyze_email_text(text: str) -> str:
    if not (text or "").strip():
        return ""
    return format_email_report(analyze_email(text))


def _analyze_log_text(text: str) -> str:
    if not (text or "").strip():
        return ""
    return format_log_report(analyze_logs(text))


def _clear() -> tuple[str, str, str]:
    return "", "", ""


def _analyzer_tab(
    *,
    label: str,
    criteria: str,
    placeholder: str,
    button: str,
    analyze,  # type: ignore[no-untyped-def]
    policy: SafeFetchPolicy,
) -> None:
    with gr.Accordion(f"{label} Criteria", open=False):
        gr.Markdown(criteria)
    with gr.Row():
        url = gr.Textbox(label="URL", placeholder="Enter URL...", scale=4)
        fetch = gr.Button("Fetch", scale=1)
    text = gr.Textbox(label="Content", placeholder=placeholder, lines=10)
    with gr.Row():
        run = gr.Button(button, variant="primary")
        clear = gr.Button("Clear", variant="stop")
    result = gr.Textbox(label="Result", lines=12)

    fetch.click(lambda u, t: _fetch_into(u, t, policy), inputs=[url, text], outputs=[text])
    run.click(analyze, inputs=[text], outputs=[result])
    clear.click(_clear, outputs=[url, text, result])


def build(cfg: AppConfig | None = None) -> gr.Blocks:
    config = cfg or load_config()[0]
    policy = policy_from_config(config)

    with gr.Blocks(title="Cyber Threat Detection") as demo:
        gr.Markdown("# Cyber Threat Detection")
        gr.Markdown("Heuristic phishing and brute-force login analysis.")
        with gr.Tabs():
            with gr.Tab("Email Analysis"):
                _analyzer_tab(
                    label="Phishing Detection",
                    criteria=format_criteria(EMAIL_CRITERIA),
                    placeholder="Paste email content here...",
                    button="Analyze Email",
                    analyze=_analyze_email_text,
                    policy=policy,
                )
            with gr.Tab("Brute Force Detection"):
                _analyzer_tab(
                    label="Brute Force Detection",
                    criteria=format_criteria(BRUTE_FORCE_CRITERIA),
                    placeholder="Paste authentication logs here...",
                    button="Analyze Logs",
                    analyze=_analyze_log_text,
                    policy=policy,
                )
    return demo


if __name__ == "__main__":
    app_config, _ = load_config()
    configure_logging(app_config.log_level)
    build(app_config).launch(share=app_config.gradio_share)
