"""Error handling utilities for CLI commands."""

from __future__ import annotations

import traceback

from rich.console import Console
from rich.markup import escape

from scriptboard.config import get_logger
from scriptboard.exceptions import ScriptBoardError

logger = get_logger(__name__)


def print_cli_error(console: Console, error: Exception, verbose: bool = False) -> None:
    """Show an error as a one-line message with its hint.

    Args:
        console: Console receiving the output
        error: The exception that was raised
        verbose: Whether to show details and tracebacks
    """
    if isinstance(error, ScriptBoardError):
        console.print(f"[red]✗ {escape(error.message)}[/red]")
        if error.hint:
            console.print(f"[yellow]→ {escape(error.hint)}[/yellow]")
        if verbose and error.details:
            console.print("[dim]Details:[/dim]")
            for key, value in error.details.items():
                console.print(f"  [dim]{key}:[/dim] {escape(str(value))}")
        logger.error(
            "ScriptBoard error occurred",
            error_type=type(error).__name__,
            message=error.message,
            hint=error.hint,
        )
    elif isinstance(error, FileNotFoundError):
        console.print(f"[red]✗ File not found: {escape(str(error))}[/red]")
        console.print("[yellow]→ Check that the file path is correct[/yellow]")
        logger.error("File not found", error=str(error))
    else:
        console.print(f"[red]✗ Unexpected error: {escape(str(error))}[/red]")
        if verbose:
            console.print(traceback.format_exc())
        logger.error(
            "Unexpected error occurred",
            error=str(error),
            error_type=type(error).__name__,
            exc_info=True,
        )
