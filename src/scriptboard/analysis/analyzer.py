"""Scene analysis backed by an LLM."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError as PydanticValidationError

from scriptboard.analysis.base import BaseSceneAnalysisAdapter
from scriptboard.analysis.models import SceneWithAnalysis
from scriptboard.analysis.prompts import (
    SCENE_ANALYSIS_PROMPT,
    SCENE_ANALYSIS_SYSTEM,
    SCRIPT_PARSE_PROMPT,
)
from scriptboard.analysis.responses import parse_json_payload
from scriptboard.board.models import SceneAnalysis
from scriptboard.config import ScriptBoardSettings, get_logger, get_settings
from scriptboard.exceptions import LLMError, ScriptParseError
from scriptboard.llm import LLMClient

logger = get_logger(__name__)


class LLMSceneAnalyzer(BaseSceneAnalysisAdapter):
    """Scene breakdowns and whole-script intake through LLMClient."""

    def __init__(
        self,
        client: LLMClient | None = None,
        settings: ScriptBoardSettings | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.client = client or LLMClient(settings=self.settings)

    async def analyze(self, body: str) -> SceneAnalysis | None:
        """Analyze one scene; any failure is logged and yields None."""
        if not body.strip():
            logger.debug("Skipping analysis of empty scene")
            return None

        try:
            response = await self.client.complete(
                SCENE_ANALYSIS_PROMPT.format(scene_text=body),
                system=SCENE_ANALYSIS_SYSTEM,
                json_mode=True,
            )
            payload = parse_json_payload(response)
            if not isinstance(payload, dict):
                raise ValueError("Expected a JSON object")
            analysis = SceneAnalysis.model_validate(payload)
        except (LLMError, ValueError, PydanticValidationError) as e:
            logger.warning(
                "Scene analysis failed",
                error=str(e),
                error_type=type(e).__name__,
                body_length=len(body),
            )
            return None

        logger.info(
            "Scene analysed",
            title=analysis.title,
            complexity=analysis.complexity.value,
            cast_size=len(analysis.cast),
        )
        return analysis

    async def parse_with_analysis(
        self, script_text: str, max_chars: int | None = None
    ) -> list[SceneWithAnalysis]:
        """Split and analyse a whole script in one model call.

        Raises:
            ScriptParseError: If the call fails or the response is unusable
        """
        limit = max_chars or self.settings.analysis_max_chars
        if len(script_text) > limit:
            logger.info(
                "Truncating script for AI parsing",
                original_length=len(script_text),
                max_chars=limit,
            )
        submitted = script_text[:limit]

        try:
            response = await self.client.complete(SCRIPT_PARSE_PROMPT.format(script_text=submitted))
            payload = parse_json_payload(response)
            scenes = _scene_list(payload)
        except (LLMError, ValueError, PydanticValidationError) as e:
            message = e.message if isinstance(e, LLMError) else str(e)
            logger.error("AI script parsing failed", error=message, error_type=type(e).__name__)
            raise ScriptParseError(
                message=f"AI script parsing failed: {message}",
                hint="Retry, or use the deterministic import without --ai",
                details={"submitted_chars": len(submitted)},
            ) from e

        logger.info("AI script parsing complete", scene_count=len(scenes))
        return scenes

    async def cleanup(self) -> None:
        await self.client.cleanup()


def _scene_list(payload: Any) -> list[SceneWithAnalysis]:
    """Validate the parse payload; bad per-scene analyses are dropped."""
    if isinstance(payload, dict) and isinstance(payload.get("scenes"), list):
        payload = payload["scenes"]
    if not isinstance(payload, list):
        raise ValueError("Expected a JSON array of scenes")

    scenes = []
    for index, item in enumerate(payload):
        if not isinstance(item, dict):
            raise ValueError(f"Scene {index + 1} is not an object")
        item = dict(item)
        raw_analysis = item.pop("analysis", None)
        scene = SceneWithAnalysis.model_validate(item)
        if raw_analysis is not None:
            try:
                scene.analysis = SceneAnalysis.model_validate(raw_analysis)
            except PydanticValidationError as e:
                logger.warning(
                    "Discarding invalid scene analysis",
                    scene_number=scene.scene_number,
                    error_count=e.error_count(),
                )
        scenes.append(scene)
    return scenes
