"""LLM provider implementations."""

from __future__ import annotations

from scriptboard.llm.providers.openai_compatible import OpenAICompatibleProvider

__all__ = [
    "OpenAICompatibleProvider",
]
