#!/usr/bin/env python3
"""
Scan a set of routes with Playwright + axe-core and write a JSON result and an
HTML report.

Configuration comes from flags, then environment variables, then defaults:

    A11Y_BASE=http://localhost:3000 A11Y_ROUTES="/, /about" python a11y_report.py
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

from playwright.async_api import async_playwright

from axe_html import HTML_NAME, write_reports
from axe_scan import AXE_CDN, scan_routes
from axe_summary import summarize

DEFAULT_BASE = "http://localhost:3000"
DEFAULT_ROUTES = "/, /blog, /projects, /services, /astra, /about"
DEFAULT_OUT = "a11y-report"

TRUTHY = {"1", "true", "yes", "on"}

logger = logging.getLogger("a11y_report")


def get_logger(name: str) -> logging.Logger:
    """Return a logger that writes to stderr, configuring it only once."""
    log = logging.getLogger(name)
    if log.handlers:
        return log

    log.setLevel(logging.INFO)
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(logging.INFO)
    log.addHandler(console_handler)
    return log


def split_list(raw: str | None) -> list[str]:
    return [part.strip() for part in (raw or "").split(",") if part.strip()]


def env_flag(name: str) -> bool:
    return (os.getenv(name) or "").strip().lower() in TRUTHY


@dataclass
class ReportConfig:
    base_url: str = DEFAULT_BASE
    routes: list[str] = field(default_factory=lambda: split_list(DEFAULT_ROUTES))
    out_dir: Path = Path(DEFAULT_OUT)
    color_scheme: str = "light"
    axe_source: str = AXE_CDN
    tags: list[str] = field(default_factory=list)
    fail_on_violations: bool = False
    ai_summary: bool = False

    @property
    def html_path(self) -> Path:
        return self.out_dir / HTML_NAME


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run axe-core over a list of routes and build an HTML report.")
    parser.add_argument("--base", help="Base URL (env A11Y_BASE)")
    parser.add_argument("--routes", help="Comma-separated routes (env A11Y_ROUTES)")
    parser.add_argument("--out", help="Output directory (env A11Y_OUT)")
    parser.add_argument("--color-scheme", choices=["light", "dark", "no-preference"], help="env A11Y_COLOR_SCHEME")
    parser.add_argument("--axe-source", help="axe.min.js URL or local path (env A11Y_AXE_SOURCE)")
    parser.add_argument("--tags", help="Comma-separated axe rule tags, e.g. wcag2a,wcag2aa (env A11Y_TAGS)")
    parser.add_argument(
        "--fail-on-violations",
        action="store_true",
        default=None,
        help="Exit 1 when any violation is found (env A11Y_FAIL_ON_VIOLATIONS)",
    )
    parser.add_argument(
        "--ai-summary",
        action="store_true",
        default=None,
        help="Add an OpenRouter summary of violations to the report (env A11Y_AI_SUMMARY)",
    )
    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> ReportConfig:
    fail_on_violations = args.fail_on_violations
    if fail_on_violations is None:
        fail_on_violations = env_flag("A11Y_FAIL_ON_VIOLATIONS")
    ai_summary = args.ai_summary
    if ai_summary is None:
        ai_summary = env_flag("A11Y_AI_SUMMARY")

    return ReportConfig(
        base_url=args.base or os.getenv("A11Y_BASE") or DEFAULT_BASE,
        routes=split_list(args.routes or os.getenv("A11Y_ROUTES") or DEFAULT_ROUTES),
        out_dir=Path(args.out or os.getenv("A11Y_OUT") or DEFAULT_OUT).resolve(),
        color_scheme=args.color_scheme or os.getenv("A11Y_COLOR_SCHEME") or "light",
        axe_source=args.axe_source or os.getenv("A11Y_AXE_SOURCE") or AXE_CDN,
        tags=split_list(args.tags or os.getenv("A11Y_TAGS")),
        fail_on_violations=fail_on_violations,
        ai_summary=ai_summary,
    )


async def run(config: ReportConfig) -> dict:
    config.out_dir.mkdir(parents=True, exist_ok=True)

    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=True)
        context = await browser.new_context(color_scheme=config.color_scheme)
        page = await context.new_page()

        merged = await scan_routes(page, config.base_url, config.routes, config.axe_source, config.tags)

        summary = summarize(merged, config.ai_summary)
        write_reports(merged, config.out_dir, summary)

        await browser.close()

    logger.info("Report ready: %s", config.html_path)
    return merged


def main(argv: list[str] | None = None) -> int:
    for name in ("a11y_report", "axe_scan", "axe_summary"):
        get_logger(name)

    try:
        config = load_config(parse_args(argv))
        merged = asyncio.run(run(config))
    except Exception:
        logger.exception("Accessibility scan failed")
        return 1

    violations = len(merged["violations"])
    if violations:
        logger.info("Found %d accessibility violations", violations)
    else:
        logger.info("No accessibility violations found")

    if config.fail_on_violations and violations:
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
