"""Settings and store construction for CLI commands."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import typer

from scriptboard.analysis import LLMSceneAnalyzer
from scriptboard.api import ProductionService
from scriptboard.config import ScriptBoardSettings, get_settings_for_cli
from scriptboard.exceptions import ValidationError
from scriptboard.store import SceneStore, SQLiteSceneStore


def settings_from_context(ctx: typer.Context | None) -> ScriptBoardSettings:
    """Settings with the global --config and --db-path options applied.

    Args:
        ctx: Typer context carrying the global options in ``obj``

    Returns:
        Settings for the current command
    """
    options: dict[str, Any] = ctx.obj if ctx and isinstance(ctx.obj, dict) else {}
    config_path: Path | None = options.get("config")
    overrides = {"database_path": options.get("db_path")}
    return get_settings_for_cli(config_path, overrides)


def open_store(settings: ScriptBoardSettings) -> SQLiteSceneStore:
    """Persistent store for the configured database."""
    return SQLiteSceneStore(settings=settings)


def build_service(
    store: SceneStore,
    settings: ScriptBoardSettings,
    with_ai: bool = False,
    on_alert: Any = None,
) -> ProductionService:
    """Production service, with an LLM analyzer when AI is requested."""
    analyzer = LLMSceneAnalyzer(settings=settings) if with_ai else None
    return ProductionService(store, analyzer=analyzer, settings=settings, on_alert=on_alert)


async def resolve_scene_id(store: SceneStore, project_id: str, reference: str) -> str:
    """Find a scene by full id or unique id prefix.

    Raises:
        ValidationError: If the prefix matches no scene or several scenes
    """
    scenes = await store.list_scenes(project_id)
    if any(scene.id == reference for scene in scenes):
        return reference
    matches = [scene.id for scene in scenes if scene.id.startswith(reference)]
    if len(matches) == 1:
        return matches[0]
    if not matches:
        raise ValidationError(
            message=f"No scene matches '{reference}'",
            hint="Run 'scriptboard board' to list scene ids",
            details={"project_id": project_id},
        )
    raise ValidationError(
        message=f"Scene id '{reference}' is ambiguous",
        hint="Use more characters of the id",
        details={"matches": ", ".join(matches[:5])},
    )


@contextmanager
def store_session(settings: ScriptBoardSettings) -> Iterator[SQLiteSceneStore]:
    """Open the configured store for one command and close it afterwards."""
    store = open_store(settings)
    try:
        yield store
    finally:
        store.close()
