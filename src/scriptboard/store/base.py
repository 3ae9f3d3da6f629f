"""Scene store contract and live-subscription plumbing."""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from collections.abc import Callable
from types import TracebackType
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from scriptboard.board.models import (
    SCENE_FIELDS,
    CustomFieldDefinition,
    Scene,
)
from scriptboard.config import get_logger
from scriptboard.exceptions import ValidationError

logger = get_logger(__name__)

SnapshotCallback = Callable[[list[Scene]], None]


class Subscription:
    """Handle for a live snapshot subscription.

    The owner releases it with close() or by using it as a context manager.
    Closing twice is harmless.
    """

    def __init__(self, registry: SubscriptionRegistry, project_id: str, callback: SnapshotCallback) -> None:
        self._registry = registry
        self.project_id = project_id
        self.callback = callback
        self._active = True

    @property
    def active(self) -> bool:
        """Whether snapshots are still delivered to the callback."""
        return self._active

    def close(self) -> None:
        """Stop receiving snapshots."""
        if self._active:
            self._active = False
            self._registry.remove(self)

    def __enter__(self) -> Subscription:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class SubscriptionRegistry:
    """Per-project subscriber lists with isolated callback failures."""

    def __init__(self) -> None:
        self._subscriptions: dict[str, list[Subscription]] = {}

    def add(self, project_id: str, callback: SnapshotCallback) -> Subscription:
        subscription = Subscription(self, project_id, callback)
        self._subscriptions.setdefault(project_id, []).append(subscription)
        return subscription

    def remove(self, subscription: Subscription) -> None:
        subscribers = self._subscriptions.get(subscription.project_id, [])
        if subscription in subscribers:
            subscribers.remove(subscription)
        if not subscribers:
            self._subscriptions.pop(subscription.project_id, None)

    def has_subscribers(self, project_id: str) -> bool:
        return bool(self._subscriptions.get(project_id))

    def deliver(self, subscription: Subscription, scenes: list[Scene]) -> None:
        """Hand a snapshot to one subscriber, logging callback failures."""
        if not subscription.active:
            return
        try:
            subscription.callback(list(scenes))
        except Exception as e:
            logger.error(
                "Snapshot callback failed",
                project_id=subscription.project_id,
                error=str(e),
                error_type=type(e).__name__,
            )

    def publish(self, project_id: str, scenes: list[Scene]) -> None:
        """Send a full snapshot to every subscriber of a project."""
        for subscription in list(self._subscriptions.get(project_id, [])):
            self.deliver(subscription, scenes)


class SceneStore(ABC):
    """Per-project scene collection with live snapshots.

    Writes are partial and field-scoped; the last write wins. Every
    successful write publishes the project's full snapshot, in insertion
    order, to its subscribers.
    """

    def __init__(self) -> None:
        self._registry = SubscriptionRegistry()

    # Scenes

    @abstractmethod
    async def create(self, project_id: str, fields: dict[str, Any]) -> str:
        """Create a scene and return its new id."""

    @abstractmethod
    async def create_many(self, project_id: str, drafts: list[dict[str, Any]]) -> list[str]:
        """Create several scenes in one batch; all or none are stored."""

    @abstractmethod
    async def get(self, project_id: str, scene_id: str) -> Scene:
        """Read one scene; raises SceneNotFoundError when absent."""

    @abstractmethod
    async def list_scenes(self, project_id: str) -> list[Scene]:
        """All scenes of a project in insertion order."""

    @abstractmethod
    async def update(self, project_id: str, scene_id: str, fields: dict[str, Any]) -> None:
        """Write a partial field update to a scene."""

    @abstractmethod
    async def delete(self, project_id: str, scene_id: str) -> None:
        """Remove a scene."""

    # Columns

    @abstractmethod
    async def get_columns(self, project_id: str) -> list[str] | None:
        """Stored board columns, or None when the project has none yet."""

    @abstractmethod
    async def set_columns(self, project_id: str, columns: list[str]) -> None:
        """Replace the stored board columns."""

    # Custom field definitions

    @abstractmethod
    async def list_fields(self, project_id: str) -> list[CustomFieldDefinition]:
        """Custom field definitions of a project in creation order."""

    @abstractmethod
    async def save_field(self, project_id: str, definition: CustomFieldDefinition) -> None:
        """Insert or replace a custom field definition."""

    @abstractmethod
    async def delete_field(self, project_id: str, field_id: str) -> None:
        """Remove a definition; stored scene values are left in place."""

    @abstractmethod
    def _snapshot(self, project_id: str) -> list[Scene]:
        """Synchronously read the project's scenes for publication."""

    async def create_field(
        self,
        project_id: str,
        name: str,
        field_type: str = "short_text",
        options: list[dict[str, str]] | None = None,
    ) -> CustomFieldDefinition:
        """Create a custom field definition with a fresh id.

        Options are only kept for select types.
        """
        definition = build_field_definition(new_id(), name, field_type, options)
        await self.save_field(project_id, definition)
        return definition

    async def update_field(
        self,
        project_id: str,
        field_id: str,
        name: str,
        field_type: str = "short_text",
        options: list[dict[str, str]] | None = None,
    ) -> CustomFieldDefinition:
        """Replace an existing custom field definition.

        Raises:
            ValidationError: If the field does not exist or the input is invalid
        """
        existing = {field.id for field in await self.list_fields(project_id)}
        if field_id not in existing:
            raise ValidationError(
                message=f"Custom field not found: {field_id}",
                hint="Run 'scriptboard field list' to see field ids",
                details={"project_id": project_id},
            )
        definition = build_field_definition(field_id, name, field_type, options)
        await self.save_field(project_id, definition)
        return definition

    async def purge_field_values(self, project_id: str, field_id: str) -> int:
        """Strip one custom field's values from every scene.

        Returns:
            Number of scenes that carried a value
        """
        purged = 0
        for scene in await self.list_scenes(project_id):
            if field_id in scene.custom_field_values:
                values = dict(scene.custom_field_values)
                values.pop(field_id)
                await self.update(project_id, scene.id, {"custom_field_values": values})
                purged += 1
        return purged

    def subscribe(self, project_id: str, callback: SnapshotCallback) -> Subscription:
        """Receive the project's snapshot now and after every write.

        Args:
            project_id: Project to watch
            callback: Called with the full list of scenes

        Returns:
            Subscription handle owned by the caller
        """
        subscription = self._registry.add(project_id, callback)
        self._registry.deliver(subscription, self._snapshot(project_id))
        return subscription

    def _publish(self, project_id: str) -> None:
        if self._registry.has_subscribers(project_id):
            self._registry.publish(project_id, self._snapshot(project_id))


def new_id() -> str:
    """Opaque unique identifier for stored records."""
    return uuid.uuid4().hex


def build_scene(scene_id: str, fields: dict[str, Any]) -> Scene:
    """Validate a full field mapping into a Scene.

    Raises:
        ValidationError: On unknown fields or values of the wrong shape
    """
    check_field_names(fields)
    try:
        return Scene.model_validate({**fields, "id": scene_id})
    except PydanticValidationError as e:
        raise ValidationError(
            message="Invalid scene fields",
            hint="Check field values against the scene model",
            details={"errors": e.errors(include_url=False)},
        ) from e


def merge_scene(scene: Scene, fields: dict[str, Any]) -> Scene:
    """Apply a partial update to a scene, returning the validated result."""
    return build_scene(scene.id, {**scene.document(), **fields})


def check_field_names(fields: dict[str, Any]) -> None:
    """Reject field names the scene model does not define."""
    unknown = sorted(set(fields) - SCENE_FIELDS)
    if unknown:
        raise ValidationError(
            message=f"Unknown scene field(s): {', '.join(unknown)}",
            hint=f"Valid fields: {', '.join(sorted(SCENE_FIELDS))}",
        )


def build_field_definition(
    field_id: str,
    name: str,
    field_type: str = "short_text",
    options: list[dict[str, str]] | None = None,
) -> CustomFieldDefinition:
    """Validate custom field input into a definition.

    Raises:
        ValidationError: On a blank name or unknown type
    """
    try:
        definition = CustomFieldDefinition.model_validate(
            {"id": field_id, "name": name, "type": field_type, "options": options or []}
        )
    except PydanticValidationError as e:
        raise ValidationError(
            message="Invalid custom field definition",
            details={"errors": e.errors(include_url=False)},
        ) from e
    if not definition.type.is_select:
        definition.options = []
    return definition
