"""Ollama chat provider — local-first, no API keys."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import httpx

from tuberag.exceptions import LLMError
from tuberag.llm.base import ChatTurn, LLMProvider, history_messages

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "llama3.1:8b"
DEFAULT_BASE_URL = "http://localhost:11434"


class OllamaLLMProvider(LLMProvider):
    """Generate answers via a local Ollama server's chat endpoint."""

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        temperature: float = 0.3,
        max_tokens: int = 1500,
        timeout: float = 120.0,
        client: httpx.Client | None = None,
    ):
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._client = (
            client if client is not None else httpx.Client(base_url=self.base_url, timeout=timeout)
        )

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
            resp = self._client.post(
                "/api/chat",
                json={
                    "model": self.model,
                    "messages": messages,
                    "stream": False,
                    "options": {
                        "temperature": self.temperature,
                        "num_predict": self.max_tokens,
                    },
                },
            )
            resp.raise_for_status()
            return resp.json().get("message", {}).get("content", "")
        except (httpx.HTTPError, ValueError) as exc:
            raise LLMError(f"Ollama generation failed ({self.model}): {exc}") from exc
