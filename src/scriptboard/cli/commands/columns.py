"""Board column commands."""

from typing import Annotated

import typer
from rich.console import Console

from scriptboard.board.columns import AddColumnResult
from scriptboard.board.engine import KanbanEngine
from scriptboard.cli.commands.options import DEFAULT_PROJECT, JsonOption, ProjectOption
from scriptboard.cli.utils.cli_handler import CLIHandler, async_cli_command
from scriptboard.cli.utils.context import settings_from_context, store_session
from scriptboard.exceptions import StoreError, ValidationError

console = Console()

column_app = typer.Typer(
    name="column",
    help="Manage board columns",
    pretty_exceptions_enable=False,
    add_completion=False,
)


@column_app.command(name="add")
@async_cli_command
async def add_column(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Column name")],
    project: ProjectOption = DEFAULT_PROJECT,
    json_output: JsonOption = False,
) -> None:
    """Append a column to the end of the board."""
    handler = CLIHandler(console)
    settings = settings_from_context(ctx)
    alerts: list[str] = []
    with store_session(settings) as store:
        async with KanbanEngine(store, project, settings, on_alert=alerts.append) as engine:
            result = await engine.add_column(name)
            columns = engine.columns.as_list()

    if result is AddColumnResult.DUPLICATE:
        handler.handle_error(
            ValidationError(message=f"Column '{name.strip()}' already exists"), json_output
        )
    if result is AddColumnResult.INVALID:
        handler.handle_error(
            ValidationError(message="Column name cannot be empty or reserved"), json_output
        )
    if alerts:
        handler.handle_error(StoreError(message=alerts[0]), json_output)
    handler.handle_success(f"Added column '{name.strip()}'", {"columns": columns}, json_output)


@column_app.command(name="list")
@async_cli_command
async def list_columns(
    ctx: typer.Context,
    project: ProjectOption = DEFAULT_PROJECT,
    json_output: JsonOption = False,
) -> None:
    """List board columns in order."""
    settings = settings_from_context(ctx)
    with store_session(settings) as store:
        async with KanbanEngine(store, project, settings) as engine:
            board = engine.board()
            columns = engine.columns

    if json_output:
        print(CLIHandler().json_formatter.format({"columns": columns.as_list()}))
        return
    for name in columns:
        console.print(f"{name}  [dim]{len(board[name])} scenes, {columns.progress(name):.0f}%[/dim]")
