"""Board view and scene commands."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from scriptboard.board.engine import KanbanEngine, MutationResult
from scriptboard.board.models import SortKey
from scriptboard.cli.commands.options import DEFAULT_PROJECT, JsonOption, ProjectOption
from scriptboard.cli.formatters.base import OutputFormat
from scriptboard.cli.formatters.board_formatter import BoardFormatter
from scriptboard.cli.utils.cli_handler import CLIHandler, async_cli_command
from scriptboard.cli.utils.context import (
    build_service,
    resolve_scene_id,
    settings_from_context,
    store_session,
)
from scriptboard.config import get_logger
from scriptboard.exceptions import ScriptBoardError, StoreError

logger = get_logger(__name__)
console = Console()

SceneArgument = Annotated[str, typer.Argument(help="Scene id or unique id prefix")]


def _check(handler: CLIHandler, result: MutationResult, json_output: bool) -> None:
    if not result.success:
        handler.handle_error(StoreError(message=result.error or "Store write failed"), json_output)


@async_cli_command
async def board_command(
    ctx: typer.Context,
    project: ProjectOption = DEFAULT_PROJECT,
    sort: Annotated[
        SortKey,
        typer.Option("--sort", "-s", help="Sort order inside each column"),
    ] = SortKey.SCENE_NUMBER,
    character: Annotated[
        str | None,
        typer.Option("--filter", "-f", help="Only scenes featuring this character"),
    ] = None,
    json_output: JsonOption = False,
) -> None:
    """Show the production board.

    Examples:
        scriptboard board --project pilot
        scriptboard board --project pilot --sort complexity --filter JOHN
    """
    settings = settings_from_context(ctx)
    with store_session(settings) as store:
        async with KanbanEngine(
            store, project, settings, sort_key=sort, character_filter=character
        ) as engine:
            board = engine.board()
            formatter = BoardFormatter(console, columns=engine.columns)

    formatter.print(board, OutputFormat.JSON if json_output else OutputFormat.TEXT)


@async_cli_command
async def move_command(
    ctx: typer.Context,
    scene: SceneArgument,
    column: Annotated[str, typer.Argument(help="Target column")],
    project: ProjectOption = DEFAULT_PROJECT,
    json_output: JsonOption = False,
) -> None:
    """Move a scene to another column."""
    handler = CLIHandler(console)
    settings = settings_from_context(ctx)
    with store_session(settings) as store:
        scene_id = await resolve_scene_id(store, project, scene)
        async with KanbanEngine(store, project, settings) as engine:
            result = await engine.set_status(scene_id, column)

    _check(handler, result, json_output)
    handler.handle_success(f"Moved scene {scene_id[:8]} to '{column}'", {"scene_id": scene_id}, json_output)


@async_cli_command
async def schedule_command(
    ctx: typer.Context,
    scene: SceneArgument,
    shoot_date: Annotated[
        str | None,
        typer.Argument(help="Shoot date (YYYY-MM-DD); omit to clear"),
    ] = None,
    project: ProjectOption = DEFAULT_PROJECT,
    json_output: JsonOption = False,
) -> None:
    """Set or clear a scene's shoot date.

    Unscheduled scenes move to the scheduled column when they get a date.
    """
    handler = CLIHandler(console)
    settings = settings_from_context(ctx)
    with store_session(settings) as store:
        scene_id = await resolve_scene_id(store, project, scene)
        async with KanbanEngine(store, project, settings) as engine:
            result = await engine.set_shoot_date(scene_id, shoot_date)
            updated = await store.get(project, scene_id)

    _check(handler, result, json_output)
    message = (
        f"Scene {scene_id[:8]} shoots on {shoot_date} ({updated.effective_status})"
        if shoot_date
        else f"Cleared shoot date of scene {scene_id[:8]}"
    )
    handler.handle_success(message, updated, json_output)


@async_cli_command
async def complete_command(
    ctx: typer.Context,
    scene: SceneArgument,
    project: ProjectOption = DEFAULT_PROJECT,
    json_output: JsonOption = False,
) -> None:
    """Toggle a scene's completed flag."""
    handler = CLIHandler(console)
    settings = settings_from_context(ctx)
    with store_session(settings) as store:
        scene_id = await resolve_scene_id(store, project, scene)
        async with KanbanEngine(store, project, settings) as engine:
            result = await engine.toggle_completed(scene_id)
            updated = await store.get(project, scene_id)

    _check(handler, result, json_output)
    state = "completed" if updated.completed else "not completed"
    handler.handle_success(f"Scene {scene_id[:8]} marked {state}", updated, json_output)


@async_cli_command
async def analyze_command(
    ctx: typer.Context,
    scene: SceneArgument,
    project: ProjectOption = DEFAULT_PROJECT,
    json_output: JsonOption = False,
) -> None:
    """Analyse a scene with the configured LLM."""
    handler = CLIHandler(console)
    settings = settings_from_context(ctx)
    with store_session(settings) as store:
        scene_id = await resolve_scene_id(store, project, scene)
        service = build_service(store, settings, with_ai=True)
        try:
            result = await service.analyze_scene(project, scene_id)
        finally:
            if service.analyzer is not None:
                await service.analyzer.cleanup()

    if not result.success or result.analysis is None:
        handler.handle_error(
            ScriptBoardError(
                message=result.error or "No analysis produced",
                hint="The scene is unchanged; try again",
            ),
            json_output,
        )
        return

    if json_output:
        handler.handle_success("Scene analysed", result.analysis, json_output)
        return
    analysis = result.analysis
    console.print(f"[bold cyan]{analysis.title or 'Untitled scene'}[/bold cyan]")
    console.print(analysis.summary)
    console.print(f"Cast: {', '.join(analysis.cast) or '-'}")
    console.print(f"Complexity: {analysis.complexity.value}")
    if analysis.time_of_day is not None:
        console.print(f"Time of day: {analysis.time_of_day.value}")


@async_cli_command
async def duplicate_command(
    ctx: typer.Context,
    scene: SceneArgument,
    project: ProjectOption = DEFAULT_PROJECT,
    json_output: JsonOption = False,
) -> None:
    """Copy a scene as a new unscheduled scene."""
    handler = CLIHandler(console)
    settings = settings_from_context(ctx)
    with store_session(settings) as store:
        scene_id = await resolve_scene_id(store, project, scene)
        async with KanbanEngine(store, project, settings) as engine:
            result = await engine.duplicate(scene_id)

    _check(handler, result, json_output)
    handler.handle_success(
        f"Duplicated scene {scene_id[:8]} as {(result.scene_id or '')[:8]}",
        {"scene_id": result.scene_id},
        json_output,
    )


@async_cli_command
async def delete_command(
    ctx: typer.Context,
    scene: SceneArgument,
    project: ProjectOption = DEFAULT_PROJECT,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Do not ask for confirmation")] = False,
    json_output: JsonOption = False,
) -> None:
    """Delete a scene."""
    handler = CLIHandler(console)
    settings = settings_from_context(ctx)
    with store_session(settings) as store:
        scene_id = await resolve_scene_id(store, project, scene)
        if not yes and not typer.confirm(f"Delete scene {scene_id[:8]}?"):
            console.print("[yellow]Cancelled[/yellow]")
            raise typer.Exit(0)
        async with KanbanEngine(store, project, settings) as engine:
            result = await engine.delete(scene_id)

    _check(handler, result, json_output)
    handler.handle_success(f"Deleted scene {scene_id[:8]}", {"scene_id": scene_id}, json_output)
