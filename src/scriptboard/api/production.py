"""Production workflows: script intake, analysis and the scene detail form."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from scriptboard.analysis.base import BaseSceneAnalysisAdapter
from scriptboard.api.models import AnalyzeResult, IntakeResult, SaveResult
from scriptboard.board.models import UNSCHEDULED, Complexity, CustomFieldDefinition, Scene
from scriptboard.board.transitions import apply_transition_rule, check_shoot_date
from scriptboard.config import ScriptBoardSettings, get_logger, get_settings
from scriptboard.exceptions import ConfigurationError, StoreError, ValidationError
from scriptboard.parser import segment
from scriptboard.store.base import SceneStore, check_field_names

logger = get_logger(__name__)

AlertCallback = Callable[[str], None]


class ProductionService:
    """Operations that move scripts and scene edits into a scene store."""

    def __init__(
        self,
        store: SceneStore,
        analyzer: BaseSceneAnalysisAdapter | None = None,
        settings: ScriptBoardSettings | None = None,
        on_alert: AlertCallback | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            store: Scene store receiving the writes
            analyzer: Scene analysis adapter; AI features are unavailable
                without one
            settings: Configuration settings
            on_alert: Called with a one-line message when a store write fails
        """
        self.store = store
        self.analyzer = analyzer
        self.settings = settings or get_settings()
        self.on_alert = on_alert

    # Intake

    async def import_script(self, project_id: str, script_text: str) -> IntakeResult:
        """Segment a script deterministically and store its scenes.

        All scenes start unscheduled and are written in one batch.
        """
        drafts = segment(script_text)
        if not drafts:
            logger.info("No scene headings found", project_id=project_id)
            return IntakeResult(success=True, error=None)

        fields = [{**draft.to_fields(), "status": UNSCHEDULED} for draft in drafts]
        try:
            scene_ids = await self.store.create_many(project_id, fields)
        except StoreError as e:
            return IntakeResult(success=False, error=self._store_failed("Script import failed", project_id, e))

        logger.info("Script imported", project_id=project_id, scene_count=len(scene_ids))
        return IntakeResult(success=True, error=None, scene_ids=scene_ids)

    async def parse_with_ai(self, project_id: str, script_text: str) -> IntakeResult:
        """Split and analyse a script with the model, then store the scenes.

        Nothing is stored unless the whole parse succeeds.

        Raises:
            ConfigurationError: If no analyzer is configured
            ScriptParseError: If the model parse fails
        """
        analyzer = self._require_analyzer()
        scenes = await analyzer.parse_with_analysis(script_text, self.settings.analysis_max_chars)
        fields = [{**scene.to_fields(), "status": UNSCHEDULED} for scene in scenes]
        if not fields:
            return IntakeResult(success=True, error=None)

        try:
            scene_ids = await self.store.create_many(project_id, fields)
        except StoreError as e:
            return IntakeResult(success=False, error=self._store_failed("AI import failed", project_id, e))

        logger.info("AI script import complete", project_id=project_id, scene_count=len(scene_ids))
        return IntakeResult(success=True, error=None, scene_ids=scene_ids)

    # Analysis

    async def analyze_scene(self, project_id: str, scene_id: str) -> AnalyzeResult:
        """Analyse a scene's body and store the result.

        When no analysis is produced the scene is left untouched and no
        alert is raised.

        Raises:
            ConfigurationError: If no analyzer is configured
        """
        analyzer = self._require_analyzer()
        try:
            scene = await self.store.get(project_id, scene_id)
        except StoreError as e:
            return AnalyzeResult(
                success=False,
                error=self._store_failed("Scene analysis failed", project_id, e),
                scene_id=scene_id,
            )

        analysis = await analyzer.analyze(scene.body)
        if analysis is None:
            return AnalyzeResult(success=False, error="No analysis produced", scene_id=scene_id)

        updates: dict[str, Any] = {"analysis": analysis.model_dump(mode="json")}
        if analysis.time_of_day is not None:
            updates["time_of_day"] = analysis.time_of_day.value
        try:
            await self.store.update(project_id, scene_id, updates)
        except StoreError as e:
            return AnalyzeResult(
                success=False,
                error=self._store_failed("Saving analysis failed", project_id, e),
                scene_id=scene_id,
            )
        return AnalyzeResult(success=True, error=None, scene_id=scene_id, analysis=analysis)

    # Detail form

    async def save_scene(
        self,
        project_id: str,
        form: dict[str, Any],
        scene_id: str | None = None,
        manual_complexity: Complexity | str | None = None,
    ) -> SaveResult:
        """Save the scene detail form.

        The body is re-analysed when an analyzer is available. A manual
        complexity replaces the one from the fresh analysis. When
        re-analysis produces nothing, the previous analysis is kept.
        Without a scene id a new scene is created.

        Args:
            project_id: Project holding the scene
            form: Edited scene fields
            scene_id: Scene being edited, None for a new scene
            manual_complexity: Complexity chosen by the user

        Returns:
            SaveResult; validation problems and store failures are reported
            in the result
        """
        try:
            check_field_names(form)
            check_shoot_date(form)
            fields = dict(form)
            if "custom_field_values" in fields:
                fields["custom_field_values"] = await self._validated_custom_values(
                    project_id, fields["custom_field_values"] or {}
                )
            complexity = Complexity(manual_complexity) if manual_complexity else None
        except ValidationError as e:
            return SaveResult(
                success=False,
                error=e.message,
                scene_id=scene_id,
                validation_errors=[e.hint] if e.hint else [],
            )
        except ValueError:
            return SaveResult(
                success=False,
                error=f"Invalid complexity: {manual_complexity}",
                scene_id=scene_id,
            )

        try:
            current = await self.store.get(project_id, scene_id) if scene_id else None
        except StoreError as e:
            return SaveResult(
                success=False,
                error=self._store_failed("Scene save failed", project_id, e),
                scene_id=scene_id,
            )

        reanalysed = False
        body = fields.get("body", current.body if current else "")
        if self.analyzer is not None and body.strip():
            analysis = await self.analyzer.analyze(body)
            if analysis is not None:
                if complexity is not None:
                    analysis.complexity = complexity
                fields["analysis"] = analysis.model_dump(mode="json")
                reanalysed = True
            else:
                logger.info("Re-analysis failed; keeping previous analysis", scene_id=scene_id)

        try:
            if current is None:
                fields = apply_transition_rule(None, fields)
                fields.setdefault("status", UNSCHEDULED)
                new_id = await self.store.create(project_id, fields)
                logger.info("Scene created from form", project_id=project_id, scene_id=new_id)
                return SaveResult(
                    success=True, error=None, scene_id=new_id, created=True, reanalysed=reanalysed
                )
            await self.store.update(project_id, current.id, apply_transition_rule(current, fields))
        except ValidationError as e:
            return SaveResult(success=False, error=e.message, scene_id=scene_id)
        except StoreError as e:
            return SaveResult(
                success=False,
                error=self._store_failed("Scene save failed", project_id, e),
                scene_id=scene_id,
            )

        logger.info("Scene saved", project_id=project_id, scene_id=current.id, reanalysed=reanalysed)
        return SaveResult(success=True, error=None, scene_id=current.id, reanalysed=reanalysed)

    # Custom fields

    async def list_fields(self, project_id: str) -> list[CustomFieldDefinition]:
        """Custom field definitions of the project."""
        return await self.store.list_fields(project_id)

    async def create_field(
        self,
        project_id: str,
        name: str,
        field_type: str = "short_text",
        options: list[dict[str, str]] | None = None,
    ) -> CustomFieldDefinition:
        """Define a new custom field; options only apply to select types."""
        definition = await self.store.create_field(project_id, name, field_type, options)
        logger.info(
            "Custom field created",
            project_id=project_id,
            field_id=definition.id,
            type=definition.type.value,
        )
        return definition

    async def update_field(
        self,
        project_id: str,
        field_id: str,
        name: str,
        field_type: str = "short_text",
        options: list[dict[str, str]] | None = None,
    ) -> CustomFieldDefinition:
        """Replace a custom field definition; stored values are not rewritten."""
        return await self.store.update_field(project_id, field_id, name, field_type, options)

    async def delete_field(self, project_id: str, field_id: str, purge: bool = False) -> int:
        """Remove a custom field definition.

        Stored scene values stay in place unless ``purge`` is set.

        Returns:
            Number of scenes whose value was purged
        """
        await self.store.delete_field(project_id, field_id)
        purged = await self.store.purge_field_values(project_id, field_id) if purge else 0
        logger.info("Custom field deleted", project_id=project_id, field_id=field_id, purged=purged)
        return purged

    async def purge_orphaned_values(self, project_id: str) -> int:
        """Strip values of deleted custom fields from every scene.

        Returns:
            Number of scenes changed
        """
        defined = {definition.id for definition in await self.store.list_fields(project_id)}
        changed = 0
        for scene in await self.store.list_scenes(project_id):
            kept = {k: v for k, v in scene.custom_field_values.items() if k in defined}
            if len(kept) != len(scene.custom_field_values):
                await self.store.update(project_id, scene.id, {"custom_field_values": kept})
                changed += 1
        logger.info("Orphaned custom values purged", project_id=project_id, scenes=changed)
        return changed

    # Helpers

    async def scenes(self, project_id: str) -> list[Scene]:
        """Current scenes of the project in store order."""
        return await self.store.list_scenes(project_id)

    async def _validated_custom_values(
        self, project_id: str, values: dict[str, Any]
    ) -> dict[str, Any]:
        definitions = {d.id: d for d in await self.store.list_fields(project_id)}
        validated = {}
        for field_id, value in values.items():
            definition = definitions.get(field_id)
            # Values of deleted fields are carried along untouched
            validated[field_id] = definition.validate_value(value) if definition else value
        return validated

    def _require_analyzer(self) -> BaseSceneAnalysisAdapter:
        if self.analyzer is None:
            raise ConfigurationError(
                message="Scene analysis is not configured",
                hint="Set SCRIPTBOARD_LLM_ENDPOINT and SCRIPTBOARD_LLM_API_KEY",
            )
        return self.analyzer

    def _store_failed(self, event: str, project_id: str, error: StoreError) -> str:
        logger.error(event, project_id=project_id, error=error.message)
        message = f"{event}: {error.message}"
        if self.on_alert is not None:
            self.on_alert(message)
        return message
