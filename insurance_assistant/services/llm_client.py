# insurance_assistant/services/llm_client.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from ..config import Settings

logger = logging.getLogger(__name__)


class LLMConfigurationError(RuntimeError):
    """The gateway cannot be called with the current settings."""


class LLMGatewayError(RuntimeError):
    status_code = 500
    user_message = "I apologize, but I'm having trouble responding right now. Please try again."

    def __init__(self, detail: str, status_code: Optional[int] = None):
        super().__init__(detail)
        if status_code is not None:
            self.status_code = status_code


class RateLimitedError(LLMGatewayError):
    status_code = 429
    user_message = "I'm receiving too many requests right now. Please wait a moment and try again."


class QuotaExhaustedError(LLMGatewayError):
    status_code = 402
    user_message = "The AI service needs to be recharged. Please contact support."


# Body of the {"error": ...} response the chat endpoint returns
GATEWAY_ERROR_DETAILS = {
    429: "Rate limit exceeded. Please try again in a moment.",
    402: "AI credits depleted. Please add credits to continue.",
}


def user_facing_error(exc: BaseException) -> str:
    """
    Map any chat failure onto one of the three messages shown to users.
    Sent as `user_message` next to the gateway detail in `/chat` error bodies.
    """
    if isinstance(exc, LLMGatewayError):
        return exc.user_message
    return LLMGatewayError.user_message


class ChatCompletionClient:
    """
    Thin client for an OpenAI-compatible /chat/completions endpoint.
    One request per call: no retries, no streaming.
    """

    def __init__(self, settings: Settings, http: Optional[httpx.Client] = None):
        self.settings = settings
        self._http = http

    def _client(self) -> httpx.Client:
        if self._http is None:
            self._http = httpx.Client(timeout=self.settings.llm_timeout_seconds)
        return self._http

    def close(self) -> None:
        if self._http is not None:
            self._http.close()
            self._http = None

    def complete(self, system_prompt: str, messages: List[Dict[str, str]]) -> str:
        if not self.settings.llm_api_key:
            raise LLMConfigurationError("LLM_API_KEY is not configured")

        url = f"{self.settings.llm_base_url.rstrip('/')}/chat/completions"
        payload: Dict[str, Any] = {
            "model": self.settings.llm_model,
            "messages": [{"role": "system", "content": system_prompt}, *messages],
            "temperature": self.settings.llm_temperature,
            "max_tokens": self.settings.llm_max_tokens,
        }
        headers = {
            "Authorization": f"Bearer {self.settings.llm_api_key}",
            "Content-Type": "application/json",
        }

        try:
            resp = self._client().post(url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            logger.error("AI gateway request failed: %s", e)
            raise LLMGatewayError(f"AI gateway request failed: {e}") from e

        if resp.status_code == 429:
            logger.warning("AI gateway rate limited the request")
            raise RateLimitedError(GATEWAY_ERROR_DETAILS[429])
        if resp.status_code == 402:
            logger.warning("AI gateway reports exhausted credits")
            raise QuotaExhaustedError(GATEWAY_ERROR_DETAILS[402])
        if resp.is_error:
            logger.error("AI gateway error: %s %s", resp.status_code, resp.text[:500])
            raise LLMGatewayError(f"AI gateway error: {resp.status_code}")

        try:
            content = resp.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise LLMGatewayError(f"Malformed AI gateway response: {e}") from e
        if not isinstance(content, str):
            raise LLMGatewayError(f"Malformed AI gateway response: content is {type(content).__name__}")
        return content
