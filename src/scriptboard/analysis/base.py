"""Base class for scene analysis adapters."""

from abc import ABC, abstractmethod

from scriptboard.analysis.models import SceneWithAnalysis
from scriptboard.board.models import SceneAnalysis


class BaseSceneAnalysisAdapter(ABC):
    """Boundary to an external scene analysis capability.

    ``analyze`` is silent on failure: it returns None and the scene stays
    unanalysed. ``parse_with_analysis`` has no sensible partial result and
    raises a descriptive error instead.
    """

    @abstractmethod
    async def analyze(self, body: str) -> SceneAnalysis | None:
        """Break down one scene's text.

        Args:
            body: Scene text (action and dialogue)

        Returns:
            Structured analysis, or None when none could be produced
        """
        pass  # pragma: no cover

    @abstractmethod
    async def parse_with_analysis(
        self, script_text: str, max_chars: int
    ) -> list[SceneWithAnalysis]:
        """Split a whole script into analysed scenes.

        Args:
            script_text: Full script text
            max_chars: Characters submitted; the rest is dropped

        Returns:
            Scenes in script order

        Raises:
            ScriptParseError: On any failure
        """
        pass  # pragma: no cover

    async def cleanup(self) -> None:  # noqa: B027
        """Release resources held by the adapter."""
        pass  # pragma: no cover
