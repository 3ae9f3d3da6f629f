"""Unified CLI handler for standardized error handling and output."""

import asyncio
from collections.abc import Callable
from functools import wraps
from typing import Any

import typer
from rich.console import Console

from scriptboard.cli.formatters.json_formatter import JsonFormatter
from scriptboard.cli.utils.error_handler import print_cli_error
from scriptboard.config import get_logger, get_settings

logger = get_logger(__name__)


class CLIHandler:
    """Unified handler for CLI commands."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize CLI handler.

        Args:
            console: Rich console for output
        """
        self.console = console or Console()
        self.json_formatter = JsonFormatter()

    def handle_error(self, error: Exception, json_output: bool = False, exit_code: int = 1) -> None:
        """Display an error and exit.

        Args:
            error: Exception to handle
            json_output: Whether to output JSON
            exit_code: Exit code to use
        """
        if json_output:
            print(self.json_formatter.format_error_response(error, exit_code))
        else:
            print_cli_error(self.console, error, verbose=get_settings().debug)
        raise typer.Exit(exit_code)

    def handle_success(self, message: str, data: Any = None, json_output: bool = False) -> None:
        """Display a success message, or a JSON envelope.

        Args:
            message: Success message
            data: Optional data to include
            json_output: Whether to output JSON
        """
        if json_output:
            print(self.json_formatter.format_success(message, data))
        else:
            self.console.print(f"[green]✓ {message}[/green]")


def cli_command(
    async_func: bool = False,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator for CLI commands with standardized error handling.

    Args:
        async_func: Whether the decorated function is async

    Returns:
        Decorator function
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            handler = CLIHandler()
            try:
                if async_func or asyncio.iscoroutinefunction(func):
                    return asyncio.run(func(*args, **kwargs))
                return func(*args, **kwargs)
            except typer.Exit:
                raise
            except Exception as e:
                handler.handle_error(e, kwargs.get("json_output", False))

        return wrapper

    return decorator


def async_cli_command(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator specifically for async CLI commands.

    Args:
        func: Async function to decorate

    Returns:
        Wrapped function
    """
    return cli_command(async_func=True)(func)
