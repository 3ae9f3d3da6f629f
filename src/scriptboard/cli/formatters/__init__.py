"""Output formatters for the CLI."""

from scriptboard.cli.formatters.base import OutputFormat, OutputFormatter
from scriptboard.cli.formatters.board_formatter import (
    BoardFormatter,
    ScheduleFormatter,
    StatsFormatter,
)
from scriptboard.cli.formatters.json_formatter import JsonFormatter

__all__ = [
    "BoardFormatter",
    "JsonFormatter",
    "OutputFormat",
    "OutputFormatter",
    "ScheduleFormatter",
    "StatsFormatter",
]
