"""CLI commands for ScriptBoard."""

from scriptboard.cli.commands.calendar import calendar_command, stats_command
from scriptboard.cli.commands.columns import column_app
from scriptboard.cli.commands.fields import field_app
from scriptboard.cli.commands.intake import import_command
from scriptboard.cli.commands.scenes import (
    analyze_command,
    board_command,
    complete_command,
    delete_command,
    duplicate_command,
    move_command,
    schedule_command,
)

__all__ = [
    "analyze_command",
    "board_command",
    "calendar_command",
    "column_app",
    "complete_command",
    "delete_command",
    "duplicate_command",
    "field_app",
    "import_command",
    "move_command",
    "schedule_command",
    "stats_command",
]
