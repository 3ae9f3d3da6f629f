"""LLM client with provider selection."""

from __future__ import annotations

from typing import Any

from scriptboard.config import ScriptBoardSettings, get_logger, get_settings
from scriptboard.exceptions import LLMError, LLMProviderError
from scriptboard.llm.base import BaseLLMProvider
from scriptboard.llm.models import CompletionRequest, LLMProvider
from scriptboard.llm.providers import OpenAICompatibleProvider

logger = get_logger(__name__)


class LLMClient:
    """Text-in/text-out completions over the configured providers."""

    def __init__(
        self,
        settings: ScriptBoardSettings | None = None,
        providers: dict[LLMProvider, BaseLLMProvider] | None = None,
        preferred_provider: LLMProvider | None = None,
        fallback_order: list[LLMProvider] | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Settings supplying endpoint, key, model and temperature
            providers: Provider instances by type; built from settings when None
            preferred_provider: Provider tried first when available
            fallback_order: Order of providers tried after the preferred one
        """
        self.settings = settings or get_settings()
        if providers is None:
            providers = {
                LLMProvider.OPENAI_COMPATIBLE: OpenAICompatibleProvider.from_settings(
                    self.settings
                )
            }
        self.providers = providers
        self.preferred_provider = preferred_provider
        self.fallback_order = fallback_order or [LLMProvider.OPENAI_COMPATIBLE]
        self.current_provider: BaseLLMProvider | None = None

    async def _select_provider(self) -> None:
        """Select the first available provider by preference."""
        order = list(self.fallback_order)
        if self.preferred_provider is not None:
            order.insert(0, self.preferred_provider)

        for provider_type in order:
            provider = self.providers.get(provider_type)
            if provider is not None and await provider.is_available():
                self.current_provider = provider
                logger.info("Using LLM provider", provider=provider_type.value)
                return

        logger.warning("No LLM providers available")

    async def ensure_provider(self) -> BaseLLMProvider:
        """Ensure a provider is selected and available.

        Raises:
            LLMError: If no provider is configured
        """
        if self.current_provider is None:
            await self._select_provider()
        if self.current_provider is None:
            raise LLMError(
                message="No LLM provider available",
                hint="Set SCRIPTBOARD_LLM_ENDPOINT and SCRIPTBOARD_LLM_API_KEY",
            )
        return self.current_provider

    async def complete(
        self,
        prompt: str | list[dict[str, str]],
        system: str | None = None,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        json_mode: bool = False,
    ) -> str:
        """Generate a completion and return its text.

        Args:
            prompt: User prompt, or a full list of chat messages
            system: System prompt prepended to the conversation
            model: Model id; defaults to the configured model
            temperature: Sampling temperature; defaults to the configured one
            max_tokens: Maximum tokens to generate
            json_mode: Ask the provider for a JSON object response

        Returns:
            Text of the first choice

        Raises:
            LLMError: If no provider is available or the request fails
        """
        provider = await self.ensure_provider()
        messages = (
            [{"role": "user", "content": prompt}] if isinstance(prompt, str) else list(prompt)
        )
        request = CompletionRequest(
            model=model or self.settings.llm_model or "",
            messages=messages,
            temperature=(
                self.settings.llm_temperature if temperature is None else temperature
            ),
            max_tokens=max_tokens,
            system=system,
            response_format={"type": "json_object"} if json_mode else None,
        )

        try:
            response = await provider.complete(request)
            return response.content
        except LLMError:
            raise
        except (IndexError, KeyError, TypeError, ValueError) as e:
            logger.error(
                "Provider failed to complete request",
                provider=provider.provider_type.value,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise LLMProviderError(
                message=f"Failed to complete prompt: {e}",
                hint="Check provider configuration and request format",
            ) from e

    async def cleanup(self) -> None:
        """Close provider connections."""
        for provider in self.providers.values():
            await provider.aclose()

    async def __aenter__(self) -> LLMClient:
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.cleanup()
