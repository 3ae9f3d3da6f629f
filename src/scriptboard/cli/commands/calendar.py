"""Shooting calendar and production stats commands."""

from typing import Annotated

import typer
from rich.console import Console

from scriptboard.cli.commands.options import DEFAULT_PROJECT, JsonOption, ProjectOption
from scriptboard.cli.formatters.base import OutputFormat
from scriptboard.cli.formatters.board_formatter import ScheduleFormatter, StatsFormatter
from scriptboard.cli.utils.cli_handler import async_cli_command
from scriptboard.cli.utils.context import settings_from_context, store_session
from scriptboard.schedule import compute_stats, project as project_schedule, upcoming

console = Console()


@async_cli_command
async def calendar_command(
    ctx: typer.Context,
    project: ProjectOption = DEFAULT_PROJECT,
    json_output: JsonOption = False,
) -> None:
    """Show scenes grouped by shoot date."""
    settings = settings_from_context(ctx)
    with store_session(settings) as store:
        scenes = await store.list_scenes(project)

    ScheduleFormatter(console).print(
        project_schedule(scenes), OutputFormat.JSON if json_output else OutputFormat.TEXT
    )


@async_cli_command
async def stats_command(
    ctx: typer.Context,
    project: ProjectOption = DEFAULT_PROJECT,
    limit: Annotated[
        int, typer.Option("--upcoming", "-n", help="Upcoming shoots to list", min=0)
    ] = 5,
    json_output: JsonOption = False,
) -> None:
    """Show production progress and upcoming shoots."""
    settings = settings_from_context(ctx)
    with store_session(settings) as store:
        scenes = await store.list_scenes(project)

    StatsFormatter(console).print(
        (compute_stats(scenes), upcoming(scenes, limit)),
        OutputFormat.JSON if json_output else OutputFormat.TEXT,
    )
