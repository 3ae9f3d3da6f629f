"""Data models for screenplay segmentation."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class SceneDraft:
    """A scene cut from raw script text, before the store assigns an id."""

    scene_number: str
    slugline: str
    body: str = ""
    completed: bool = False
    characters: list[str] = field(default_factory=list)

    def to_fields(self) -> dict[str, Any]:
        """Field mapping used when creating the scene in a store."""
        return {
            "scene_number": self.scene_number,
            "slugline": self.slugline,
            "body": self.body,
            "completed": self.completed,
            "characters": list(self.characters),
        }


@dataclass
class SluglineInfo:
    """Components of a scene heading."""

    scene_type: str
    location: str | None
    time_of_day: str | None
