# insurance_assistant/services/web_search.py
from __future__ import annotations

import logging
from typing import List, Optional

import httpx

from ..config import Settings

logger = logging.getLogger(__name__)


def search_context(query: str, settings: Settings, http: Optional[httpx.Client] = None) -> str:
    """
    Top web results for `query` as "- title: snippet" lines, or "" when
    search is not configured or anything goes wrong. Never raises.
    """
    if not query or not settings.search_enabled:
        return ""

    params = {
        "key": settings.google_api_key,
        "cx": settings.google_search_engine_id,
        "q": f"health insurance {query}",
        "num": settings.search_results,
    }
    try:
        if http is None:
            with httpx.Client(timeout=settings.llm_timeout_seconds) as client:
                resp = client.get(settings.search_url, params=params)
        else:
            resp = http.get(settings.search_url, params=params)
        resp.raise_for_status()
        items = resp.json().get("items") or []
        lines: List[str] = [f"- {it.get('title', '')}: {it.get('snippet', '')}" for it in items]
    except (httpx.HTTPError, ValueError, AttributeError, TypeError) as e:
        # search is optional context; the chat goes on without it
        logger.warning("Search error, continuing without context: %s", type(e).__name__)
        return ""

    if lines:
        logger.info("Added %d search results to prompt", len(lines))
    return "\n".join(lines)
