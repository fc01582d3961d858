# axe_scan.py
import logging
from datetime import UTC, datetime
from pathlib import Path
from urllib.parse import urljoin, urlparse

logger = logging.getLogger(__name__)

AXE_CDN = "https://cdnjs.cloudflare.com/ajax/libs/axe-core/4.9.1/axe.min.js"

# Smooth scrolling makes axe flag elements mid-animation
SCROLL_RESET_CSS = "* { scroll-behavior: auto !important }"

CATEGORIES = ("passes", "violations", "incomplete", "inapplicable")

AXE_RUN_JS = """
    async (options) => {
        return await axe.run(document, options);
    }
"""


def resolve_route(base_url: str, route: str) -> str:
    """Resolve a route path against the base URL, rejecting unusable bases."""
    parsed = urlparse(base_url)
    if parsed.scheme not in ("http", "https", "file"):
        raise ValueError(f"Invalid base URL: {base_url!r}")
    if parsed.scheme != "file" and not parsed.netloc:
        raise ValueError(f"Invalid base URL: {base_url!r}")
    return urljoin(base_url, route)


def new_scan_result(base_url: str) -> dict:
    timestamp = datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return {
        "url": base_url,
        "timestamp": timestamp,
        "passes": [],
        "violations": [],
        "incomplete": [],
        "inapplicable": [],
    }


def tag_issues(items: list[dict], url: str) -> list[dict]:
    return [{**item, "url": url} for item in items]


def axe_options(tags: list[str] | None) -> dict:
    if not tags:
        return {}
    return {"runOnly": {"type": "tag", "values": list(tags)}}


async def inject_axe(page, axe_source: str):
    # A local copy of axe.min.js keeps scans working without the CDN
    if Path(axe_source).is_file():
        await page.add_script_tag(path=axe_source)
    else:
        await page.add_script_tag(url=axe_source)


async def audit_page(page, url: str, axe_source: str = AXE_CDN, tags: list[str] | None = None) -> dict:
    """Load one URL in the shared page and run axe against it.

    Navigation replaces the document, so the scroll override and the axe
    script are injected again on every call.
    """
    await page.goto(url, wait_until="networkidle")
    await page.add_style_tag(content=SCROLL_RESET_CSS)
    await inject_axe(page, axe_source)
    return await page.evaluate(AXE_RUN_JS, axe_options(tags))


async def scan_routes(
    page,
    base_url: str,
    routes: list[str],
    axe_source: str = AXE_CDN,
    tags: list[str] | None = None,
) -> dict:
    merged = new_scan_result(base_url)

    # One route at a time: audits share the page
    for route in routes:
        url = resolve_route(base_url, route)
        logger.info("Scanning %s", url)
        results = await audit_page(page, url, axe_source, tags)

        for key in CATEGORIES:
            merged[key].extend(tag_issues(results.get(key, []), url))

        logger.info(
            "%s: %d violations, %d incomplete",
            url,
            len(results.get("violations", [])),
            len(results.get("incomplete", [])),
        )

    return merged
