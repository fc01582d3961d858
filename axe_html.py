# axe_html.py
"""
JSON and HTML report writers for merged axe results.

The HTML report is a single file with inline styles so it can be attached to a
PR or opened straight from a CI artifact.
"""

from __future__ import annotations

import json
from html import escape
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

JSON_NAME = "axe-results.json"
HTML_NAME = "axe-report.html"

MAX_NODES = 50

SECTIONS = (
    ("Violations", "violations"),
    ("Incomplete", "incomplete"),
    ("Inapplicable", "inapplicable"),
    ("Passes", "passes"),
)

DEFAULT_PORTS = {"http": 80, "https": 443}

STYLE = """
  :root { --bg:#0e0b14; --panel:#14111c; --text:#e6e1f4; --muted:#a7a0bd; --pink:#ff59b9; --cyan:#60e2ff; --violet:#b79cff; --bad:#ff6b6b; --warn:#ffb020; --ok:#34d399; }
  body { margin:0; background:var(--bg); color:var(--text); font: 14px/1.5 ui-sans-serif, system-ui, -apple-system, Segoe UI, Roboto, Inter, "Helvetica Neue", Arial; }
  header { padding:24px; border-bottom:1px solid #241f33; background:linear-gradient(180deg, rgba(255,89,185,.08), transparent 60%); }
  header h1 { margin:0 0 6px; font-size:20px; }
  header .meta { color:var(--muted); font-size:12px; }
  main { padding: 24px; max-width: 1100px; margin: 0 auto; }
  .summary { display:flex; gap:12px; flex-wrap:wrap; margin: 16px 0 28px; }
  .card { background:var(--panel); border:1px solid #241f33; border-radius:12px; padding:12px 14px; min-width:160px; }
  .card h3 { margin:0 0 4px; font-size:13px; color:var(--muted); }
  .card .num { font-size:20px; font-weight:700; }
  .ai-summary { background:var(--panel); border:1px solid #241f33; border-radius:12px; padding:12px 14px; }
  .ai-summary p { margin:0 0 8px; }
  section { margin: 24px 0; }
  h2 { font-size:16px; margin: 0 0 12px; }
  .issues { list-style:none; padding:0; margin:0; display:grid; gap:12px; }
  .issue { background:var(--panel); border:1px solid #241f33; border-radius:12px; padding:12px; }
  .issue .head { display:flex; justify-content:space-between; gap:12px; align-items:baseline; }
  .issue .id { font-weight:700; }
  .issue .help { color:var(--muted); margin:6px 0 8px; }
  .issue .url { color:var(--cyan); font-size:12px; }
  .badge { display:inline-block; padding:2px 6px; border-radius:999px; font-size:11px; margin-right:6px; border:1px solid #2a243b; background:#1a1626; }
  .impact { color:#ffd9e9; }
  .wcag { color:#d8eafe; }
  .issue.violations { border-color: #3a2030; }
  .issue.incomplete { border-color: #3a2b1f; }
  .issue.inapplicable { border-color: #1f2f2f; }
  details { background:#100d18; border:1px solid #241f33; border-radius:10px; padding:8px 10px; }
  summary { cursor:pointer; color:var(--violet); }
  .nodes { margin:8px 0 0 18px; }
  code { background:#100d18; color:#eae4ff; padding:1px 4px; border-radius:6px; }
  .none { color:var(--muted); }
  footer { color:var(--muted); font-size:12px; padding:24px; border-top:1px solid #241f33; margin-top:32px; }
"""


def esc(value: Any = "") -> str:
    if value is None:
        return ""
    return escape(str(value), quote=True)


def badge(text: Any, cls: str) -> str:
    return f'<span class="badge {cls}">{esc(text)}</span>'


def to_json(result: dict[str, Any]) -> str:
    return json.dumps(result, indent=2, ensure_ascii=False)


def count_issues(result: dict[str, Any]) -> dict[str, int]:
    return {key: len(result.get(key) or []) for _, key in SECTIONS}


def wcag_tags(tags: list[str] | None) -> str:
    return ", ".join(t for t in (tags or []) if t.startswith("wcag")) or "wcag-n/a"


def report_host(base_url: str) -> str:
    parsed = urlparse(base_url)
    host = parsed.hostname or ""
    if ":" in host:
        host = f"[{host}]"
    if parsed.port is not None and parsed.port != DEFAULT_PORTS.get(parsed.scheme):
        host = f"{host}:{parsed.port}"
    return host


def _selector(part: Any) -> str:
    # Shadow DOM and iframe targets arrive as nested selector lists
    if isinstance(part, list):
        return ",".join(str(p) for p in part)
    return str(part)


def _render_node(node: dict[str, Any]) -> str:
    target = " ".join(_selector(t) for t in (node.get("target") or []))
    fail = node.get("failureSummary")
    fail_html = f'<div class="fail">{esc(fail)}</div>' if fail else ""
    return f"""
                <li>
                  <div class="target"><code>{esc(target)}</code></div>
                  {fail_html}
                </li>"""


def _render_nodes(nodes: Any) -> str:
    if not isinstance(nodes, list) or not nodes:
        return ""
    items = "".join(_render_node(n) for n in nodes[:MAX_NODES])
    return f"""
          <details>
            <summary>Nodes ({len(nodes)})</summary>
            <ol class="nodes">{items}
            </ol>
          </details>"""


def _render_issue(issue: dict[str, Any], kind: str, fallback_url: str) -> str:
    return f"""
      <li class="issue {kind}">
        <div class="head">
          <div class="id">{esc(issue.get("id"))}</div>
          <div class="meta">
            {badge(issue.get("impact") or "n/a", "impact")}
            {badge(wcag_tags(issue.get("tags")), "wcag")}
            <span class="url">{esc(issue.get("url") or fallback_url)}</span>
          </div>
        </div>
        <div class="help">{esc(issue.get("help") or "")}</div>{_render_nodes(issue.get("nodes"))}
      </li>"""


def render_section(title: str, items: list[dict[str, Any]], kind: str, fallback_url: str = "") -> str:
    if not items:
        return f'<section><h2>{esc(title)} (0)</h2><p class="none">None</p></section>'
    cards = "".join(_render_issue(item, kind, fallback_url) for item in items)
    return f"""
<section>
  <h2>{esc(title)} ({len(items)})</h2>
  <ul class="issues">{cards}
  </ul>
</section>"""


def _render_summary_text(summary: str | None) -> str:
    if not summary:
        return ""
    paragraphs = [p.strip() for p in summary.split("\n\n") if p.strip()]
    body = "".join(f"<p>{esc(p)}</p>" for p in paragraphs)
    return f"""
  <section class="ai-summary">
    <h2>Summary</h2>
    {body}
  </section>"""


def build_html(result: dict[str, Any], summary: str | None = None) -> str:
    counts = count_issues(result)
    base_url = result.get("url") or ""
    sections = "\n  ".join(
        render_section(title, result.get(key) or [], key, base_url) for title, key in SECTIONS
    )
    return f"""<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<title>A11y Report – {esc(report_host(base_url))}</title>
<meta name="viewport" content="width=device-width, initial-scale=1" />
<style>{STYLE}</style>
</head>
<body>
<header>
  <h1>Accessibility Report</h1>
  <div class="meta">Base: {esc(base_url)} • Generated: {esc(result.get("timestamp"))}</div>
  <div class="summary">
    <div class="card"><h3>Violations</h3><div class="num" style="color:var(--bad)">{counts["violations"]}</div></div>
    <div class="card"><h3>Incomplete</h3><div class="num" style="color:var(--warn)">{counts["incomplete"]}</div></div>
    <div class="card"><h3>Inapplicable</h3><div class="num">{counts["inapplicable"]}</div></div>
    <div class="card"><h3>Passes</h3><div class="num" style="color:var(--ok)">{counts["passes"]}</div></div>
  </div>
</header>
<main>{_render_summary_text(summary)}
  {sections}
</main>
<footer>
  Generated with Playwright + axe-core.
</footer>
</body>
</html>"""


def write_reports(result: dict[str, Any], out_dir: str | Path, summary: str | None = None) -> tuple[Path, Path]:
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)
    json_path = out / JSON_NAME
    html_path = out / HTML_NAME
    json_path.write_text(to_json(result), encoding="utf-8")
    html_path.write_text(build_html(result, summary), encoding="utf-8")
    return json_path, html_path
