"""Anthropic Claude chat provider.

Requires the ``anthropic`` extra and ``ANTHROPIC_API_KEY`` env var.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from tuberag.exceptions import LLMError
from tuberag.llm.base import ChatTurn, LLMProvider, history_messages

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-sonnet-4-20250514"


class AnthropicLLMProvider(LLMProvider):
    """Generate answers via the Anthropic Messages API."""

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        api_key: str | None = None,
        max_tokens: int = 1500,
        temperature: float = 0.3,
    ):
        try:
            import anthropic
        except ImportError as exc:
            raise ImportError(
                "anthropic package required: pip install tube-rag[anthropic]"
            ) from exc

        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self._client: Any = anthropic.Anthropic(api_key=api_key)

    def generate(
        self,
        prompt: str,
        system: str | None = None,
        history: Sequence[ChatTurn] | None = None,
    ) -> str:
        messages = history_messages(history)
        messages.append({"role": "user", "content": prompt})

        kwargs: dict[str, Any] = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
            "messages": messages,
        }
        if system:
            kwargs["system"] = system

        try:
            response = self._client.messages.create(**kwargs)
        except Exception as exc:
            raise LLMError(f"Anthropic generation failed ({self.model}): {exc}") from exc
        return response.content[0].text
