"""Date-grouped shooting schedule derived from scenes."""

from __future__ import annotations

from collections.abc import Iterable

from scriptboard.board.models import Scene
from scriptboard.board.sorting import parse_scene_number, parse_shoot_date


def project(scenes: Iterable[Scene]) -> dict[str, list[Scene]]:
    """Group dated scenes by shoot date.

    Only scenes with a non-empty shoot date are included, keyed by the
    exact date string. Groups are ordered by date, with unparsable dates
    after valid ones (by string); scenes inside a group are ordered by
    scene number. The input is not modified.

    Args:
        scenes: Scenes in any order

    Returns:
        Ordered mapping of date string to scenes
    """
    groups: dict[str, list[Scene]] = {}
    for scene in scenes:
        if scene.shoot_date and scene.shoot_date.strip():
            groups.setdefault(scene.shoot_date, []).append(scene)

    def date_key(value: str) -> tuple[int, str]:
        parsed = parse_shoot_date(value)
        return (0, parsed.isoformat()) if parsed else (1, value)

    return {
        shoot_date: sorted(groups[shoot_date], key=lambda s: parse_scene_number(s.scene_number))
        for shoot_date in sorted(groups, key=date_key)
    }
