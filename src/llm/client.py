"""Async Claude API client for the message classifier."""

from __future__ import annotations

import logging
from typing import Any

import anthropic

from src.config import settings

logger = logging.getLogger(__name__)

_client: anthropic.AsyncAnthropic | None = None


def _get_client() -> anthropic.AsyncAnthropic:
    """Lazily initialize the Anthropic client."""
    global _client  # noqa: PLW0603
    if _client is None:
        _client = anthropic.AsyncAnthropic(
            api_key=settings.anthropic_api_key,
            timeout=settings.classifier_timeout,
        )
    return _client


async def complete_text(
    messages: list[dict[str, Any]],
    *,
    system: str | None = None,
    model: str | None = None,
    max_tokens: int | None = None,
    temperature: float | None = None,
) -> str:
    """Single-shot Claude call — no tools, no streaming.

    Returns the text of the first content block. API and network errors
    propagate to the caller.
    """
    client = _get_client()
    kwargs: dict[str, Any] = {
        "model": model or settings.classifier_model,
        "max_tokens": max_tokens or settings.classifier_max_tokens,
        "messages": messages,
    }
    if system is not None:
        kwargs["system"] = system
    if temperature is not None:
        kwargs["temperature"] = temperature
    response = await client.messages.create(**kwargs)
    return response.content[0].text
