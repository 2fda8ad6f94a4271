"""Abstract base class for LLM providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class ChatTurn:
    """One prior message of the conversation."""

    role: str  # "user" or "assistant"
    content: str


class LLMProvider(ABC):
    """Interface for answer generation."""

    model: str = ""

    @abstractmethod
    def generate(
        self,
        prompt: str,
        system: str | None = None,
        history: Sequence[ChatTurn] | None = None,
    ) -> str:
        """Generate a response from the LLM.

        Args:
            prompt: The user prompt (question plus retrieved context).
            system: Optional system prompt.
            history: Earlier turns of the chat, oldest first.

        Returns:
            Generated text response.

        Raises:
            LLMError: The provider could not produce an answer.
        """

    @classmethod
    def provider_name(cls) -> str:
        """Return human-readable provider name."""
        return cls.__name__


def history_messages(history: Sequence[ChatTurn] | None) -> list[dict[str, str]]:
    """Chat-API message dicts for prior turns."""
    return [{"role": t.role, "content": t.content} for t in history or ()]
