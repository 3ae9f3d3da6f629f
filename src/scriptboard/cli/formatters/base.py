"""Shared plumbing for board, calendar and stats output."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Generic, TypeVar

from rich.console import Console

T = TypeVar("T")


class OutputFormat(str, Enum):
    """Rich text for people, JSON for ``--json``."""

    TEXT = "text"
    JSON = "json"


class OutputFormatter(ABC, Generic[T]):
    """Renders one kind of CLI result as Rich markup or JSON."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    @abstractmethod
    def format(self, data: T, format_type: OutputFormat = OutputFormat.TEXT) -> str:
        """Render ``data``; TEXT output may contain Rich markup."""

    def print(self, data: T, format_type: OutputFormat = OutputFormat.TEXT) -> None:
        """Render and write ``data``.

        JSON goes to stdout untouched by Rich so scripts can parse it.
        """
        output = self.format(data, format_type)
        if format_type == OutputFormat.JSON:
            print(output)
        else:
            self.console.print(output)
