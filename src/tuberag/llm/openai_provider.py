"""OpenAI chat provider.

Requires the ``openai`` extra and ``OPENAI_API_KEY`` env var.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from tuberag.exceptions import LLMError
from tuberag.llm.base import ChatTurn, LLMProvider, history_messages

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"


class OpenAILLMProvider(LLMProvider):
    """Generate answers via the OpenAI Chat Completions API."""

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        api_key: str | None = None,
        max_tokens: int = 1500,
        temperature: float = 0.3,
        client: Any | None = None,
    ):
        if client is None:
            try:
                import openai
            except ImportError as exc:
                raise ImportError(
                    "openai package required: pip install tube-rag[openai]"
                ) from exc
            client = openai.OpenAI(api_key=api_key)

        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self._client: Any = client

    def generate(
        self,
        prompt: str,
        system: str | None = None,
        history: Sequence[ChatTurn] | None = None,
    ) -> str:
        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.extend(history_messages(history))
        messages.append({"role": "user", "content": prompt})

        try:
            response = self._client.chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except Exception as exc:
            raise LLMError(f"OpenAI generation failed ({self.model}): {exc}") from exc
        return response.choices[0].message.content or ""
