"""Google Gemini adapter built on the ``google-genai`` SDK."""

from __future__ import annotations

import logging
from typing import Any

from google import genai
from google.genai import types

from gimme_readme.core.types import DispatchConfig, ModelResponse, UsageMetrics

log = logging.getLogger(__name__)


def _get_token_count(usage_obj: Any, attr_name: str) -> int:
    """Safely extract a token count from a usage object."""
    try:
        value = getattr(usage_obj, attr_name, 0)
        return int(value) if value is not None else 0
    except (ValueError, TypeError):
        return 0


def extract_usage_metrics(response: Any) -> UsageMetrics | None:
    """Extract token usage from an API response, or None when absent."""
    usage = getattr(response, "usage_metadata", None)
    if usage is None:
        return None
    return UsageMetrics(
        prompt_tokens=_get_token_count(usage, "prompt_token_count"),
        output_tokens=_get_token_count(usage, "candidates_token_count"),
        cached_tokens=_get_token_count(usage, "cached_content_token_count"),
    )


class GoogleGenAIAdapter:
    """Async Gemini text generation through ``client.aio.models``."""

    def __init__(self, api_key: str, *, client: genai.Client | None = None) -> None:
        """Create the SDK client for ``api_key`` unless one is supplied."""
        if not api_key and client is None:
            raise ValueError("A Gemini API key is required.")
        self._client = client or genai.Client(api_key=api_key)

    async def infer_text(self, prompt: str, config: DispatchConfig) -> ModelResponse:
        """Issue a single ``generate_content`` call."""
        generation_config = types.GenerateContentConfig(
            temperature=config.temperature,
            response_mime_type="text/plain",
        )
        log.debug(
            "generate_content model=%s temperature=%s prompt_chars=%d",
            config.model,
            config.temperature,
            len(prompt),
        )
        response = await self._client.aio.models.generate_content(
            model=config.model,
            contents=prompt,
            config=generation_config,
        )
        text = response.text
        if text is None:
            raise RuntimeError(f"Model returned no text ({_finish_reason(response)})")
        usage = extract_usage_metrics(response) if config.wants_usage_metrics else None
        return ModelResponse(text=text, usage=usage)


def _finish_reason(response: Any) -> str:
    candidates = getattr(response, "candidates", None) or []
    if candidates:
        reason = getattr(candidates[0], "finish_reason", None)
        if reason is not None:
            return f"finish_reason={getattr(reason, 'name', reason)}"
    feedback = getattr(response, "prompt_feedback", None)
    if feedback is not None and getattr(feedback, "block_reason", None) is not None:
        return f"block_reason={getattr(feedback.block_reason, 'name', feedback.block_reason)}"
    return "no candidates"
