"""Results of AI-driven script intake."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, field_validator

from scriptboard.board.models import SceneAnalysis


class SceneWithAnalysis(BaseModel):
    """A scene split out of a script by the model, with its breakdown."""

    scene_number: str = ""
    slugline: str = ""
    body: str = ""
    analysis: SceneAnalysis | None = None

    @field_validator("scene_number", mode="before")
    @classmethod
    def stringify_scene_number(cls, v: Any) -> Any:
        """Models sometimes return scene numbers as integers."""
        if isinstance(v, int | float):
            return str(int(v))
        return "" if v is None else v

    def to_fields(self) -> dict[str, Any]:
        """Field mapping for store creation."""
        fields: dict[str, Any] = {
            "scene_number": self.scene_number,
            "slugline": self.slugline.strip(),
            "body": self.body.strip(),
        }
        if self.analysis is not None:
            fields["analysis"] = self.analysis.model_dump(mode="json")
            fields["characters"] = list(self.analysis.cast)
            if self.analysis.time_of_day is not None:
                fields["time_of_day"] = self.analysis.time_of_day.value
        return fields
