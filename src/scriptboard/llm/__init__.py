"""LLM integration module for ScriptBoard."""

from __future__ import annotations

from scriptboard.llm.base import BaseLLMProvider
from scriptboard.llm.client import LLMClient
from scriptboard.llm.models import CompletionRequest, CompletionResponse, LLMProvider

__all__ = [
    "BaseLLMProvider",
    "CompletionRequest",
    "CompletionResponse",
    "LLMClient",
    "LLMProvider",
]
