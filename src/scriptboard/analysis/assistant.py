"""Co-writing assistant: director chat and direct script edits."""

from __future__ import annotations

from scriptboard.analysis.prompts import BLANK_SCRIPT_HTML, DIRECTOR_SYSTEM, SCRIPT_EDIT_PROMPT
from scriptboard.analysis.responses import strip_code_fences
from scriptboard.config import ScriptBoardSettings, get_logger, get_settings
from scriptboard.exceptions import LLMError
from scriptboard.llm import LLMClient

logger = get_logger(__name__)

CHAT_MAX_TOKENS = 8000

_ROLE_ALIASES = {"model": "assistant", "ai": "assistant", "human": "user"}


class ScriptAssistant:
    """Text-in/text-out writing help."""

    def __init__(
        self,
        client: LLMClient | None = None,
        settings: ScriptBoardSettings | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.client = client or LLMClient(settings=self.settings)

    async def chat(self, message: str, history: list[dict[str, str]] | None = None) -> str:
        """Continue a conversation with the director persona.

        Args:
            message: The writer's new message
            history: Earlier turns as {"role", "content"} mappings

        Returns:
            The assistant's reply

        Raises:
            LLMError: If the model call fails
        """
        messages = [
            {"role": _ROLE_ALIASES.get(turn["role"], turn["role"]), "content": turn["content"]}
            for turn in history or []
        ]
        messages.append({"role": "user", "content": message})

        try:
            reply = await self.client.complete(
                messages, system=DIRECTOR_SYSTEM, max_tokens=CHAT_MAX_TOKENS
            )
        except LLMError as e:
            logger.error("Director chat failed", error=e.message)
            raise LLMError(
                message=f"Assistant chat failed: {e.message}",
                hint=e.hint,
            ) from e
        return reply.strip()

    async def edit(self, current_html: str, instruction: str) -> str:
        """Rewrite or extend script HTML following an instruction.

        Raises:
            LLMError: If the model call fails
        """
        prompt = SCRIPT_EDIT_PROMPT.format(
            current_html=current_html or BLANK_SCRIPT_HTML,
            instruction=instruction,
        )
        try:
            reply = await self.client.complete(prompt)
        except LLMError as e:
            logger.error("Script edit failed", error=e.message)
            raise LLMError(message="Failed to edit script with AI", hint=e.message) from e
        return strip_code_fences(reply, language="html")
