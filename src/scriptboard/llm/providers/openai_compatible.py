"""Generic OpenAI-compatible API provider."""

from __future__ import annotations

import json
from typing import Any

import httpx

from scriptboard.config import ScriptBoardSettings, get_logger
from scriptboard.exceptions import LLMProviderError
from scriptboard.llm.base import BaseLLMProvider
from scriptboard.llm.models import CompletionRequest, CompletionResponse, LLMProvider

logger = get_logger(__name__)


class OpenAICompatibleProvider(BaseLLMProvider):
    """Chat completions against any OpenAI-compatible endpoint."""

    provider_type = LLMProvider.OPENAI_COMPATIBLE

    def __init__(
        self,
        endpoint: str | None = None,
        api_key: str | None = None,
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize OpenAI-compatible provider.

        Args:
            endpoint: API base URL, e.g. https://api.example.com/v1
            api_key: Bearer token for the endpoint
            timeout: HTTP request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = (endpoint or "").rstrip("/")
        self.api_key = api_key or ""
        self.timeout = timeout
        self.client = httpx.AsyncClient(timeout=httpx.Timeout(timeout), transport=transport)

        logger.debug(
            "Initialized OpenAI-compatible provider",
            endpoint=self.base_url if self.base_url else "not configured",
            has_api_key=bool(self.api_key),
            timeout=timeout,
        )

    @classmethod
    def from_settings(
        cls,
        settings: ScriptBoardSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> OpenAICompatibleProvider:
        """Build a provider from the llm_* settings."""
        return cls(
            endpoint=settings.llm_endpoint,
            api_key=settings.llm_api_key,
            timeout=settings.llm_timeout,
            transport=transport,
        )

    async def is_available(self) -> bool:
        """Check if endpoint and API key are configured."""
        if not self.base_url or not self.api_key:
            logger.debug(
                "OpenAI-compatible provider not available",
                reason="missing configuration",
                has_endpoint=bool(self.base_url),
                has_api_key=bool(self.api_key),
            )
            return False
        return True

    async def __aenter__(self) -> OpenAICompatibleProvider:
        """Enter async context manager."""
        return self

    async def __aexit__(self, *_: Any) -> None:
        """Exit async context manager and cleanup."""
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        """Generate completion using the /chat/completions API.

        Raises:
            LLMProviderError: On missing configuration, transport failures,
                non-200 responses or malformed payloads
        """
        if not self.base_url or not self.api_key:
            raise LLMProviderError(
                message="OpenAI-compatible endpoint not configured",
                hint="Set SCRIPTBOARD_LLM_ENDPOINT and SCRIPTBOARD_LLM_API_KEY",
            )

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload: dict[str, Any] = {
            "model": request.model,
            "messages": request.messages,
            "temperature": request.temperature,
        }
        if request.max_tokens:
            payload["max_tokens"] = request.max_tokens
        if request.system:
            payload["messages"] = [
                {"role": "system", "content": request.system},
                *request.messages,
            ]
        if request.response_format:
            payload["response_format"] = request.response_format

        completions_url = f"{self.base_url}/chat/completions"
        logger.info(
            "Sending completion request",
            endpoint=completions_url,
            model=request.model,
            message_count=len(payload["messages"]),
            temperature=request.temperature,
        )

        try:
            response = await self.client.post(completions_url, headers=headers, json=payload)
        except httpx.HTTPError as e:
            logger.error(
                "Completion request failed",
                error=str(e),
                error_type=type(e).__name__,
                endpoint=completions_url,
            )
            raise LLMProviderError(
                message=f"LLM request failed: {e}",
                hint="Check that the endpoint is reachable",
                details={"endpoint": completions_url},
            ) from e

        if response.status_code != 200:
            error_text = response.text
            logger.error(
                "OpenAI-compatible API error",
                status_code=response.status_code,
                error_text=error_text[:500],
                endpoint=completions_url,
                model=request.model,
            )
            raise LLMProviderError(
                message=f"API error {response.status_code}: {error_text[:200]}",
                details={"endpoint": completions_url, "model": request.model},
            )

        try:
            data: dict[str, Any] = response.json()
            completion = CompletionResponse(
                id=data.get("id", ""),
                model=data.get("model", request.model),
                choices=data.get("choices", []),
                usage=data.get("usage") or {},
                provider=self.provider_type,
            )
        except (json.JSONDecodeError, ValueError, AttributeError) as e:
            logger.error(
                "Completion response parsing failed",
                error=str(e),
                error_type=type(e).__name__,
                endpoint=completions_url,
            )
            raise LLMProviderError(message=f"Invalid API response: {e}") from e

        logger.info(
            "Completion successful",
            model=completion.model,
            usage=dict(completion.usage),
            choice_count=len(completion.choices),
        )
        return completion
