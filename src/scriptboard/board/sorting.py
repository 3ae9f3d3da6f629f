"""Scene sorting for board columns and schedules."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from datetime import date
from typing import Any

from scriptboard.board.models import Scene, SortKey

_LEADING_INTEGER = re.compile(r"^\s*([+-]?\d+)")


def parse_scene_number(scene_number: str | None) -> int:
    """Read the leading integer of a scene number label.

    "12" gives 12, "2A" gives 2 and "5 -copy" gives 5. Labels without a
    leading integer give 0.

    Args:
        scene_number: Display label of a scene

    Returns:
        Integer used for numeric ordering
    """
    if not scene_number:
        return 0
    match = _LEADING_INTEGER.match(scene_number)
    return int(match.group(1)) if match else 0


def parse_shoot_date(value: str | None) -> date | None:
    """Parse a YYYY-MM-DD shoot date; blank or malformed values give None."""
    if not value or not value.strip():
        return None
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None


def _complexity_rank(scene: Scene) -> int:
    # Unanalysed scenes rank 0 and sort first
    return scene.analysis.complexity.rank if scene.analysis else 0


def _shoot_date_key(descending: bool) -> Callable[[Scene], tuple[Any, ...]]:
    def key(scene: Scene) -> tuple[Any, ...]:
        parsed = parse_shoot_date(scene.shoot_date)
        if parsed is None:
            return (1, 0)
        ordinal = parsed.toordinal()
        return (0, -ordinal if descending else ordinal)

    return key


_SORT_KEYS: dict[SortKey, Callable[[Scene], Any]] = {
    SortKey.SCENE_NUMBER: lambda scene: parse_scene_number(scene.scene_number),
    SortKey.COMPLEXITY: _complexity_rank,
    SortKey.CAST_SIZE: lambda scene: -scene.cast_size,
    SortKey.SHOOT_DATE_ASC: _shoot_date_key(descending=False),
    SortKey.SHOOT_DATE_DESC: _shoot_date_key(descending=True),
}


def sort_scenes(
    scenes: Iterable[Scene], sort_key: SortKey | str = SortKey.SCENE_NUMBER
) -> list[Scene]:
    """Order scenes for display within one column.

    Completed scenes always come after open ones. Inside each group the
    selected key applies:

    - scene_number: ascending leading integer of the label
    - complexity: Low, Medium, High, with unanalysed scenes first
    - cast_size: largest cast first
    - shoot_date_asc / shoot_date_desc: by date, undated scenes last

    Ties keep their incoming order.

    Args:
        scenes: Scenes in snapshot order
        sort_key: Sort order, as a SortKey or its string value

    Returns:
        New sorted list
    """
    key_func = _SORT_KEYS[SortKey(sort_key)]
    return sorted(scenes, key=lambda scene: (scene.completed, key_func(scene)))
