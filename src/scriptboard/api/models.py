"""Result types for production operations."""

from dataclasses import dataclass, field

from scriptboard.board.models import SceneAnalysis


@dataclass
class IntakeResult:
    """Result of importing a script into a project."""

    success: bool
    error: str | None
    scene_ids: list[str] = field(default_factory=list)

    @property
    def scene_count(self) -> int:
        """Number of scenes created."""
        return len(self.scene_ids)


@dataclass
class AnalyzeResult:
    """Result of analysing one scene."""

    success: bool
    error: str | None
    scene_id: str
    analysis: SceneAnalysis | None = None


@dataclass
class SaveResult:
    """Result of saving a scene from the detail form."""

    success: bool
    error: str | None
    scene_id: str | None = None
    created: bool = False
    reanalysed: bool = False
    validation_errors: list[str] = field(default_factory=list)
