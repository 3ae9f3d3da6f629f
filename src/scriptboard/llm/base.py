"""Base class for LLM providers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from scriptboard.llm.models import CompletionRequest, CompletionResponse, LLMProvider


class BaseLLMProvider(ABC):
    """Base class for LLM providers."""

    provider_type: LLMProvider

    @abstractmethod
    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        """Generate text completion."""
        pass

    @abstractmethod
    async def is_available(self) -> bool:
        """Check if provider is available."""
        pass

    async def aclose(self) -> None:  # noqa: B027
        """Release network resources held by the provider."""
