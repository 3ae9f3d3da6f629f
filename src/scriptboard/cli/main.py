"""Main CLI entry point."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from scriptboard import __version__
from scriptboard.cli.commands import (
    analyze_command,
    board_command,
    calendar_command,
    column_app,
    complete_command,
    delete_command,
    duplicate_command,
    field_app,
    import_command,
    move_command,
    schedule_command,
    stats_command,
)
from scriptboard.cli.formatters.json_formatter import JsonFormatter
from scriptboard.config import configure_logging, get_logger
from scriptboard.config.settings import get_settings_for_cli, set_settings

logger = get_logger(__name__)
console = Console()

app = typer.Typer(
    name="scriptboard",
    help="Screenplay breakdown and production board",
    pretty_exceptions_enable=False,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command(name="import")(import_command)
app.command(name="board")(board_command)
app.command(name="move")(move_command)
app.command(name="schedule")(schedule_command)
app.command(name="complete")(complete_command)
app.command(name="analyze")(analyze_command)
app.command(name="duplicate")(duplicate_command)
app.command(name="delete")(delete_command)
app.command(name="calendar")(calendar_command)
app.command(name="stats")(stats_command)

app.add_typer(column_app, name="column")
app.add_typer(field_app, name="field")


@app.command()
def version(
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show ScriptBoard version."""
    version_info = {
        "name": "ScriptBoard",
        "version": __version__,
        "description": "Screenplay breakdown and production board",
    }
    if json_output:
        print(JsonFormatter().format(version_info))
    else:
        console.print(f"ScriptBoard v{version_info['version']}")


@app.callback()
def main_callback(
    ctx: typer.Context,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file (YAML, TOML, or JSON)",
            envvar="SCRIPTBOARD_CONFIG",
        ),
    ] = None,
    db_path: Annotated[
        Path | None,
        typer.Option("--db-path", help="SQLite database file", envvar="SCRIPTBOARD_DB_PATH"),
    ] = None,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug logging and detailed errors"),
    ] = False,
) -> None:
    """Configure global options."""
    ctx.obj = {"config": config, "db_path": db_path}
    if debug:
        settings = get_settings_for_cli(config, {"debug": True, "log_level": "DEBUG"})
        set_settings(settings)
        configure_logging(settings)
        ctx.obj["config"] = None
        logger.debug("Debug mode enabled")


def main() -> None:
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
