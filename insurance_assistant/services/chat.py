# insurance_assistant/services/chat.py
"""AI-mode chat: system prompt from the catalog, optional search context, one gateway call."""
from __future__ import annotations

import logging
from typing import Dict, List, Optional

import httpx

from ..config import Settings
from ..schemas import ChatMessage
from .llm_client import ChatCompletionClient
from .plan_catalog import PlanCatalog
from .prompt_builder import build_system_prompt
from .web_search import search_context

logger = logging.getLogger(__name__)


def last_user_message(messages: List[ChatMessage]) -> Optional[ChatMessage]:
    for m in reversed(messages):
        if m.role == "user":
            return m
    return None


def chat_with_assistant(
    messages: List[ChatMessage],
    *,
    catalog: PlanCatalog,
    settings: Settings,
    llm: ChatCompletionClient,
    use_search: bool = False,
    search_http: Optional[httpx.Client] = None,
) -> str:
    """
    Answer the transcript with the remote model. Gateway errors propagate to
    the caller; the rule-based policy is not used as a fallback.
    """
    logger.info("Processing insurance chat request with %d messages", len(messages))

    context = ""
    last = last_user_message(messages)
    if use_search and last is not None:
        context = search_context(last.content, settings, http=search_http)

    system_prompt = build_system_prompt(catalog, search_context=context)
    transcript: List[Dict[str, str]] = [{"role": m.role, "content": m.content} for m in messages]
    reply = llm.complete(system_prompt, transcript)

    logger.info("Successfully generated AI response")
    return reply
