"""Live Kanban board over a project's scene store."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from types import TracebackType
from typing import Any

from scriptboard.board.columns import UNASSIGNED, AddColumnResult, ColumnSet
from scriptboard.board.filters import all_characters, filter_by_character
from scriptboard.board.models import UNSCHEDULED, Scene, SortKey
from scriptboard.board.sorting import sort_scenes
from scriptboard.board.transitions import (
    apply_transition_rule,
    check_shoot_date,
    duplicate_scene_fields,
)
from scriptboard.config import ScriptBoardSettings, get_logger, get_settings
from scriptboard.exceptions import InvalidTransitionError, StoreError
from scriptboard.store.base import SceneStore, Subscription, merge_scene

logger = get_logger(__name__)

AlertCallback = Callable[[str], None]


@dataclass
class MutationResult:
    """Outcome of a board mutation written to the store."""

    success: bool
    scene_id: str | None = None
    error: str | None = None


class KanbanEngine:
    """Board state for one project: columns, sort, filter and mutations.

    The engine keeps the latest store snapshot through an owned
    subscription and recomputes columns from it on every read. Mutations
    update the local snapshot first and then write to the store. A failed
    write is logged and reported through ``on_alert``; the local change is
    kept until the next snapshot replaces it.

    Example:
        >>> async with KanbanEngine(store, "pilot") as board:
        ...     await board.handle_drag_end(scene_id, "shot")
        ...     board.board()["shot"]
    """

    def __init__(
        self,
        store: SceneStore,
        project_id: str,
        settings: ScriptBoardSettings | None = None,
        sort_key: SortKey | str = SortKey.SCENE_NUMBER,
        character_filter: str | None = None,
        on_alert: AlertCallback | None = None,
    ) -> None:
        """Initialize the engine; call open() or use it as a context manager.

        Args:
            store: Scene store holding the project
            project_id: Project shown on the board
            settings: Settings providing the default columns
            sort_key: Initial sort order
            character_filter: Initial character filter, None for all
            on_alert: Called with a one-line message when a write fails
        """
        self.store = store
        self.project_id = project_id
        self.settings = settings or get_settings()
        self.on_alert = on_alert
        self.sort_key = sort_key
        self.character_filter = character_filter
        self.columns = ColumnSet(self.settings.default_columns)
        self._scenes: list[Scene] = []
        self._subscription: Subscription | None = None

    # Lifecycle

    def open(self) -> KanbanEngine:
        """Subscribe to the project; the current snapshot arrives immediately."""
        if self._subscription is None:
            self._subscription = self.store.subscribe(self.project_id, self._on_snapshot)
            logger.debug("Board opened", project_id=self.project_id)
        return self

    def close(self) -> None:
        """Release the store subscription."""
        if self._subscription is not None:
            self._subscription.close()
            self._subscription = None
            logger.debug("Board closed", project_id=self.project_id)

    @property
    def is_open(self) -> bool:
        return self._subscription is not None and self._subscription.active

    async def load_columns(self) -> None:
        """Replace the column set with the one stored for the project."""
        stored = await self.store.get_columns(self.project_id)
        if stored is not None:
            self.columns = ColumnSet(stored)

    def __enter__(self) -> KanbanEngine:
        return self.open()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    async def __aenter__(self) -> KanbanEngine:
        await self.load_columns()
        return self.open()

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _on_snapshot(self, scenes: list[Scene]) -> None:
        self._scenes = list(scenes)

    # View state

    @property
    def sort_key(self) -> SortKey:
        return self._sort_key

    @sort_key.setter
    def sort_key(self, value: SortKey | str) -> None:
        self._sort_key = SortKey(value)

    @property
    def character_filter(self) -> str | None:
        return self._character_filter

    @character_filter.setter
    def character_filter(self, value: str | None) -> None:
        self._character_filter = value or None

    @property
    def scenes(self) -> list[Scene]:
        """Current snapshot in store order, unfiltered."""
        return list(self._scenes)

    def characters(self) -> list[str]:
        """Character names available to the filter."""
        return all_characters(self._scenes)

    def board(self) -> dict[str, list[Scene]]:
        """Scenes per column, filtered then sorted.

        Returns:
            Mapping in column order. Scenes whose status is not a live
            column are collected under UNASSIGNED, present only when
            non-empty.
        """
        visible = filter_by_character(self._scenes, self._character_filter)
        grouped: dict[str, list[Scene]] = {name: [] for name in self.columns}
        unassigned: list[Scene] = []
        for scene in visible:
            status = scene.effective_status
            if status in grouped:
                grouped[status].append(scene)
            else:
                unassigned.append(scene)

        result = {name: sort_scenes(group, self._sort_key) for name, group in grouped.items()}
        if unassigned:
            result[UNASSIGNED] = sort_scenes(unassigned, self._sort_key)
        return result

    def column_scenes(self, column: str) -> list[Scene]:
        """Sorted, filtered scenes of one column (or the UNASSIGNED bucket)."""
        return self.board().get(column, [])

    def column_progress(self, column: str) -> float:
        """Progress percentage a column stands for on the board."""
        return self.columns.progress(column)

    # Mutations

    async def handle_drag_end(self, scene_id: str, target_id: str | None) -> MutationResult | None:
        """Move a dropped scene to the column it was dropped on.

        Args:
            scene_id: Dragged scene
            target_id: Id of the drop target; anything that is not a live
                column (a card, the unassigned bucket, nothing) is ignored

        Returns:
            Result of the status write, or None when the drop was ignored
        """
        if not target_id or target_id not in self.columns:
            logger.debug(
                "Drop ignored",
                project_id=self.project_id,
                scene_id=scene_id,
                target=target_id,
            )
            return None
        return await self.update_fields(scene_id, {"status": target_id})

    async def set_status(self, scene_id: str, status: str) -> MutationResult:
        """Write a scene's status; the status must be a live column."""
        return await self.update_fields(scene_id, {"status": status})

    async def set_shoot_date(self, scene_id: str, shoot_date: str | None) -> MutationResult:
        """Set or clear a scene's shoot date.

        Raises:
            ValidationError: If the date is not YYYY-MM-DD
        """
        return await self.update_fields(scene_id, {"shoot_date": shoot_date or None})

    async def toggle_completed(self, scene_id: str) -> MutationResult:
        """Flip a scene's completed flag."""
        try:
            scene = await self._current(scene_id)
        except StoreError as e:
            return self._failed("Scene update failed", scene_id, e)
        return await self.update_fields(scene_id, {"completed": not scene.completed})

    async def update_field(self, scene_id: str, name: str, value: Any) -> MutationResult:
        """Write a single scene field."""
        return await self.update_fields(scene_id, {name: value})

    async def update_fields(self, scene_id: str, fields: dict[str, Any]) -> MutationResult:
        """Write a partial update, applying the shoot-date transition rule.

        Args:
            scene_id: Scene to update
            fields: Field values to write

        Returns:
            MutationResult; store failures are reported, not raised

        Raises:
            InvalidTransitionError: If an explicit status is not a live column
            ValidationError: If a field is unknown or malformed
        """
        status = fields.get("status")
        if "status" in fields and status not in self.columns:
            logger.warning(
                "Rejected status change",
                project_id=self.project_id,
                scene_id=scene_id,
                status=status,
            )
            raise InvalidTransitionError(str(status), self.columns.as_list())

        check_shoot_date(fields)

        try:
            scene = await self._current(scene_id)
        except StoreError as e:
            return self._failed("Scene update failed", scene_id, e)

        updates = apply_transition_rule(scene, fields)
        self._replace_local(merge_scene(scene, updates))

        try:
            await self.store.update(self.project_id, scene_id, updates)
        except StoreError as e:
            return self._failed("Scene update failed", scene_id, e)

        logger.debug(
            "Scene updated",
            project_id=self.project_id,
            scene_id=scene_id,
            fields=sorted(updates),
        )
        return MutationResult(success=True, scene_id=scene_id)

    async def duplicate(self, scene_id: str) -> MutationResult:
        """Copy a scene as a new unscheduled scene."""
        try:
            scene = await self._current(scene_id)
            new_id = await self.store.create(self.project_id, duplicate_scene_fields(scene))
        except StoreError as e:
            return self._failed("Scene duplication failed", scene_id, e)

        logger.info(
            "Scene duplicated",
            project_id=self.project_id,
            scene_id=scene_id,
            new_scene_id=new_id,
        )
        return MutationResult(success=True, scene_id=new_id)

    async def delete(self, scene_id: str) -> MutationResult:
        """Remove a scene from the board and the store."""
        self._scenes = [scene for scene in self._scenes if scene.id != scene_id]
        try:
            await self.store.delete(self.project_id, scene_id)
        except StoreError as e:
            return self._failed("Scene deletion failed", scene_id, e)

        logger.info("Scene deleted", project_id=self.project_id, scene_id=scene_id)
        return MutationResult(success=True, scene_id=scene_id)

    async def add_scene(self) -> MutationResult:
        """Create an empty unscheduled scene numbered after the last one."""
        draft = {
            "scene_number": str(len(self._scenes) + 1),
            "slugline": "",
            "body": "",
            "status": UNSCHEDULED,
        }
        try:
            scene_id = await self.store.create(self.project_id, draft)
        except StoreError as e:
            return self._failed("Scene creation failed", None, e)
        return MutationResult(success=True, scene_id=scene_id)

    async def add_column(self, name: str) -> AddColumnResult:
        """Append a column to the board and persist the column list.

        Returns:
            ADDED, DUPLICATE or INVALID; a failed persist is reported
            through on_alert but the column stays on the local board
        """
        result = self.columns.add(name)
        if result is not AddColumnResult.ADDED:
            logger.info(
                "Column not added",
                project_id=self.project_id,
                column=name,
                reason=result.value,
            )
            return result

        try:
            await self.store.set_columns(self.project_id, self.columns.as_list())
        except StoreError as e:
            self._failed("Column save failed", None, e)
        return result

    # Helpers

    async def _current(self, scene_id: str) -> Scene:
        for scene in self._scenes:
            if scene.id == scene_id:
                return scene
        return await self.store.get(self.project_id, scene_id)

    def _replace_local(self, updated: Scene) -> None:
        self._scenes = [updated if scene.id == updated.id else scene for scene in self._scenes]

    def _failed(self, event: str, scene_id: str | None, error: StoreError) -> MutationResult:
        logger.error(
            event,
            project_id=self.project_id,
            scene_id=scene_id,
            error=error.message,
        )
        if self.on_alert is not None:
            self.on_alert(f"{event}: {error.message}")
        return MutationResult(success=False, scene_id=scene_id, error=error.message)
