"""Request and response shapes for chat completions."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field
from typing_extensions import TypedDict


class LLMProvider(str, Enum):
    """Completion backends ScriptBoard can talk to."""

    OPENAI_COMPATIBLE = "openai_compatible"


class ChoiceMessage(TypedDict):
    """Assistant message of one returned choice; content may be null."""

    role: str
    content: Any


class Choice(TypedDict):
    index: int
    message: ChoiceMessage
    finish_reason: str


class TokenUsage(TypedDict, total=False):
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


class ResponseFormat(TypedDict, total=False):
    """``{"type": "json_object"}`` when scene analysis asks for JSON."""

    type: str


class CompletionRequest(BaseModel):
    """One chat completion call.

    ``messages`` holds the conversation without the system prompt;
    providers put ``system`` in front of it in their own wire format.
    """

    model: str
    messages: list[dict[str, str]]
    temperature: float = 0.4
    max_tokens: int | None = None
    system: str | None = None
    response_format: ResponseFormat | None = None


class CompletionResponse(BaseModel):
    """Parsed completion reply."""

    id: str
    model: str
    choices: list[Choice]
    usage: TokenUsage = Field(default_factory=lambda: TokenUsage())
    provider: LLMProvider

    @property
    def content(self) -> str:
        """Text of the first choice; a null content reads as empty.

        Raises:
            IndexError: If the reply carried no choices
        """
        if not self.choices:
            raise IndexError("Completion returned no choices")
        content = self.choices[0]["message"]["content"]
        return "" if content is None else str(content)
