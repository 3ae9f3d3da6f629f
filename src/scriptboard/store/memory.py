"""In-process scene store."""

from __future__ import annotations

from typing import Any

from scriptboard.board.models import CustomFieldDefinition, Scene
from scriptboard.config import get_logger
from scriptboard.exceptions import SceneNotFoundError
from scriptboard.store.base import SceneStore, build_scene, merge_scene, new_id

logger = get_logger(__name__)


class MemorySceneStore(SceneStore):
    """Scene store kept in dictionaries, for tests and embedding."""

    def __init__(self) -> None:
        super().__init__()
        self._scenes: dict[str, dict[str, Scene]] = {}
        self._columns: dict[str, list[str]] = {}
        self._fields: dict[str, dict[str, CustomFieldDefinition]] = {}

    async def create(self, project_id: str, fields: dict[str, Any]) -> str:
        (scene_id,) = await self.create_many(project_id, [fields])
        return scene_id

    async def create_many(self, project_id: str, drafts: list[dict[str, Any]]) -> list[str]:
        # Validate everything before storing anything
        scenes = [build_scene(new_id(), fields) for fields in drafts]
        project = self._scenes.setdefault(project_id, {})
        for scene in scenes:
            project[scene.id] = scene
        logger.debug("Scenes created", project_id=project_id, count=len(scenes))
        self._publish(project_id)
        return [scene.id for scene in scenes]

    async def get(self, project_id: str, scene_id: str) -> Scene:
        return self._require(project_id, scene_id).model_copy(deep=True)

    async def list_scenes(self, project_id: str) -> list[Scene]:
        return self._snapshot(project_id)

    async def update(self, project_id: str, scene_id: str, fields: dict[str, Any]) -> None:
        scene = self._require(project_id, scene_id)
        self._scenes[project_id][scene_id] = merge_scene(scene, fields)
        self._publish(project_id)

    async def delete(self, project_id: str, scene_id: str) -> None:
        self._require(project_id, scene_id)
        del self._scenes[project_id][scene_id]
        self._publish(project_id)

    async def get_columns(self, project_id: str) -> list[str] | None:
        columns = self._columns.get(project_id)
        return list(columns) if columns is not None else None

    async def set_columns(self, project_id: str, columns: list[str]) -> None:
        self._columns[project_id] = list(columns)

    async def list_fields(self, project_id: str) -> list[CustomFieldDefinition]:
        return [
            definition.model_copy(deep=True)
            for definition in self._fields.get(project_id, {}).values()
        ]

    async def save_field(self, project_id: str, definition: CustomFieldDefinition) -> None:
        self._fields.setdefault(project_id, {})[definition.id] = definition.model_copy(
            deep=True
        )

    async def delete_field(self, project_id: str, field_id: str) -> None:
        self._fields.get(project_id, {}).pop(field_id, None)

    def _snapshot(self, project_id: str) -> list[Scene]:
        return [
            scene.model_copy(deep=True)
            for scene in self._scenes.get(project_id, {}).values()
        ]

    def _require(self, project_id: str, scene_id: str) -> Scene:
        try:
            return self._scenes[project_id][scene_id]
        except KeyError:
            raise SceneNotFoundError(project_id, scene_id) from None
