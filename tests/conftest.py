# tests/conftest.py
import sys
from pathlib import Path

# Ensure the repo root is in sys.path for imports
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def make_issue(issue_id, impact=None, tags=None, help_text="", nodes=None):
    return {"id": issue_id, "impact": impact, "tags": tags or [], "help": help_text, "nodes": nodes or []}


def axe_results(violations=None, passes=None, incomplete=None, inapplicable=None):
    return {
        "url": "ignored",
        "passes": passes or [],
        "violations": violations or [],
        "incomplete": incomplete or [],
        "inapplicable": inapplicable or [],
    }


class FakePage:
    """Stands in for a Playwright page; records calls and replays axe results per URL."""

    def __init__(self, results_by_url=None, fail_on=None):
        self.results_by_url = results_by_url or {}
        self.fail_on = fail_on
        self.calls = []
        self.current_url = None

    async def goto(self, url, wait_until=None):
        self.calls.append(("goto", url, wait_until))
        if url == self.fail_on:
            raise RuntimeError(f"net::ERR_CONNECTION_REFUSED at {url}")
        self.current_url = url

    async def add_style_tag(self, content=None):
        self.calls.append(("style", content))

    async def add_script_tag(self, url=None, path=None):
        self.calls.append(("script", url or path))

    async def evaluate(self, expression, arg=None):
        self.calls.append(("evaluate", arg))
        return self.results_by_url.get(self.current_url, axe_results())


class FakeBrowser:
    def __init__(self, page):
        self.page = page
        self.closed = False
        self.context_kwargs = None

    async def new_context(self, **kwargs):
        self.context_kwargs = kwargs
        return self

    async def new_page(self):
        return self.page

    async def close(self):
        self.closed = True


class FakePlaywright:
    def __init__(self, browser):
        self.chromium = self
        self.browser = browser

    async def launch(self, headless=True):
        return self.browser

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False
