"""Production progress figures for a project."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from scriptboard.board.models import EDIT, SCHEDULED, SHOT, Scene
from scriptboard.board.sorting import parse_shoot_date

_DONE_STATUSES = frozenset({SHOT, EDIT})


@dataclass(frozen=True)
class ProductionStats:
    """Scene counts by production state."""

    total: int
    completed: int
    in_progress: int
    waiting: int

    @property
    def progress(self) -> int:
        """Completed share of all scenes, as a rounded percentage."""
        if not self.total:
            return 0
        return round(self.completed / self.total * 100)


def is_done(scene: Scene) -> bool:
    """Shot or in edit, or marked completed."""
    return scene.completed or scene.effective_status in _DONE_STATUSES


def compute_stats(scenes: Iterable[Scene]) -> ProductionStats:
    """Count scenes that are done, scheduled, or still waiting."""
    total = completed = in_progress = 0
    for scene in scenes:
        total += 1
        if is_done(scene):
            completed += 1
        elif scene.effective_status == SCHEDULED:
            in_progress += 1
    return ProductionStats(
        total=total,
        completed=completed,
        in_progress=in_progress,
        waiting=total - completed - in_progress,
    )


def upcoming(scenes: Iterable[Scene], limit: int | None = None) -> list[Scene]:
    """Scheduled scenes with a shoot date, soonest first.

    Args:
        scenes: Scenes of a project
        limit: Maximum number of scenes returned

    Returns:
        Scenes ordered by shoot date; unparsable dates come last
    """
    dated = [
        scene
        for scene in scenes
        if scene.effective_status == SCHEDULED and scene.shoot_date
    ]

    def key(scene: Scene) -> tuple[int, str]:
        parsed = parse_shoot_date(scene.shoot_date)
        return (0, parsed.isoformat()) if parsed else (1, scene.shoot_date or "")

    ordered = sorted(dated, key=key)
    return ordered[:limit] if limit is not None else ordered
