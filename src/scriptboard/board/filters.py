"""Character filtering for board columns."""

from __future__ import annotations

from collections.abc import Iterable

from scriptboard.board.models import Scene


def scene_has_character(scene: Scene, name: str) -> bool:
    """Whether a name appears in the scene's characters or analysed cast."""
    if name in scene.characters:
        return True
    return scene.analysis is not None and name in scene.analysis.cast


def filter_by_character(scenes: Iterable[Scene], name: str | None) -> list[Scene]:
    """Keep scenes featuring a character; an empty name keeps everything.

    Matching is exact and case-sensitive against both the scene's
    character list and its analysed cast.

    Args:
        scenes: Scenes to filter
        name: Character name, or None/"" for all scenes

    Returns:
        Matching scenes in their incoming order
    """
    if not name:
        return list(scenes)
    return [scene for scene in scenes if scene_has_character(scene, name)]


def all_characters(scenes: Iterable[Scene]) -> list[str]:
    """Sorted unique character names across scenes, for the filter picker."""
    names: set[str] = set()
    for scene in scenes:
        names.update(scene.characters)
        if scene.analysis:
            names.update(scene.analysis.cast)
    names.discard("")
    return sorted(names)
