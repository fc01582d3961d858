import json
import logging
import os

import requests

logger = logging.getLogger(__name__)

OPENROUTER_URL = "https://openrouter.ai/api/v1/chat/completions"
DEFAULT_MODEL = "google/gemini-2.0-flash-lite-preview-02-05:free"


def violations_text(violations, limit=40):
    """Flatten merged violations into one line each for the prompt."""
    lines = []
    for v in violations[:limit]:
        lines.append(f"{v.get('id')} ({v.get('impact') or 'n/a'}) – {v.get('help', '')} [{v.get('url', '')}]")
    if len(violations) > limit:
        lines.append(f"... and {len(violations) - limit} more")
    return "\n".join(lines)


def get_ai_summary(violations_text, api_key=None, model=DEFAULT_MODEL, timeout=60):
    """Calls OpenRouter to summarize violations into 2 paragraphs."""
    api_key = api_key or os.getenv("OPENROUTER_API_KEY")

    prompt = (
        "You are an accessibility expert. I will provide a list of axe-core violations. "
        "Please provide a 2-paragraph summary. The first paragraph should explain the "
        "major themes of the errors found. The second paragraph should provide actionable "
        "advice for the developer to fix them according to WCAG standards.\n\n"
        f"Violations:\n{violations_text}"
    )

    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
        "X-Title": "Axe-Core-Summarizer"
    }

    data = {
        "model": model,
        "messages": [{"role": "user", "content": prompt}]
    }

    try:
        response = requests.post(OPENROUTER_URL, headers=headers, data=json.dumps(data), timeout=timeout)
        response.raise_for_status()
        return response.json()['choices'][0]['message']['content']
    except (requests.RequestException, ValueError, KeyError, IndexError, TypeError) as e:
        logger.warning("AI summary failed: %s", e)
        return f"Could not generate AI summary: {str(e)}"


def summarize(result, enabled, api_key=None):
    """Return a summary for the report, or None when it should be skipped."""
    if not enabled:
        return None
    violations = result.get("violations") or []
    if not violations:
        logger.info("No violations, skipping AI summary")
        return None
    api_key = api_key or os.getenv("OPENROUTER_API_KEY")
    if not api_key:
        logger.warning("OPENROUTER_API_KEY is not set, skipping AI summary")
        return None
    return get_ai_summary(violations_text(violations), api_key=api_key)
