"""Kanban board rules.

The stateful board lives in scriptboard.board.engine, which depends on
the scene store.
"""

from __future__ import annotations

from .columns import UNASSIGNED, AddColumnResult, ColumnSet
from .filters import all_characters, filter_by_character, scene_has_character
from .models import (
    EDIT,
    SCHEDULED,
    SHOT,
    UNSCHEDULED,
    Complexity,
    CustomFieldDefinition,
    FieldOption,
    FieldType,
    Scene,
    SceneAnalysis,
    SortKey,
    TimeOfDay,
)
from .sorting import parse_scene_number, parse_shoot_date, sort_scenes
from .transitions import apply_transition_rule, check_shoot_date, duplicate_scene_fields

__all__ = [
    "EDIT",
    "SCHEDULED",
    "SHOT",
    "UNASSIGNED",
    "UNSCHEDULED",
    "AddColumnResult",
    "ColumnSet",
    "Complexity",
    "CustomFieldDefinition",
    "FieldOption",
    "FieldType",
    "Scene",
    "SceneAnalysis",
    "SortKey",
    "TimeOfDay",
    "all_characters",
    "apply_transition_rule",
    "check_shoot_date",
    "duplicate_scene_fields",
    "filter_by_character",
    "parse_scene_number",
    "parse_shoot_date",
    "scene_has_character",
    "sort_scenes",
]
