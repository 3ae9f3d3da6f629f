"""Status transition rules for scenes on the board."""

from __future__ import annotations

from typing import Any

from scriptboard.board.models import SCHEDULED, UNSCHEDULED, Scene
from scriptboard.board.sorting import parse_shoot_date
from scriptboard.exceptions import ValidationError


def apply_transition_rule(scene: Scene | None, fields: dict[str, Any]) -> dict[str, Any]:
    """Complete a partial update with the status change it implies.

    Setting a non-empty shoot date on a scene that is unscheduled (or has no
    status yet) also moves it to scheduled. Clearing a date never moves a
    scene back, and no other field triggers a status change. A status equal
    to the one the scene already has (unscheduled for a new scene), as an
    edit form echoes it back, is not an explicit change.

    Args:
        scene: Current scene, or None when creating a new one
        fields: Partial field update about to be written

    Returns:
        A new mapping with any implied status added; the input is not modified
    """
    updates = dict(fields)
    current_status = (scene.status if scene is not None else None) or UNSCHEDULED
    explicit = "status" in updates and (updates["status"] or UNSCHEDULED) != current_status
    if not updates.get("shoot_date") or explicit:
        return updates

    if current_status == UNSCHEDULED:
        updates["status"] = SCHEDULED
    return updates


def duplicate_scene_fields(scene: Scene) -> dict[str, Any]:
    """Fields for a copy of a scene.

    Everything is copied except the id, which the store assigns; the copy
    starts unscheduled and its scene number gets a " -copy" suffix.

    Args:
        scene: Scene to copy

    Returns:
        Field mapping ready for store creation
    """
    fields = scene.document()
    fields["status"] = UNSCHEDULED
    fields["scene_number"] = f"{scene.scene_number} -copy"
    return fields


def check_shoot_date(fields: dict[str, Any]) -> None:
    """Reject a non-empty shoot date that is not YYYY-MM-DD.

    Raises:
        ValidationError: If ``shoot_date`` is set but malformed
    """
    shoot_date = fields.get("shoot_date")
    if shoot_date and parse_shoot_date(shoot_date) is None:
        raise ValidationError(
            message=f"Invalid shoot date: {shoot_date}",
            hint="Use the YYYY-MM-DD format",
        )
