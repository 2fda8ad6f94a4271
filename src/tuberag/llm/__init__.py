"""LLM providers — OpenAI, Anthropic, Ollama."""

from tuberag.llm.base import ChatTurn, LLMProvider
from tuberag.llm.factory import available_providers, get_llm_provider

__all__ = ["ChatTurn", "LLMProvider", "available_providers", "get_llm_provider"]
