"""Ordered, duplicate-free column set for a project board."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from enum import Enum

from scriptboard.config.settings import BUILTIN_COLUMNS

# Bucket for scenes whose status matches no live column
UNASSIGNED = "__unassigned__"


class AddColumnResult(str, Enum):
    """Outcome of adding a column."""

    ADDED = "added"
    DUPLICATE = "duplicate"
    INVALID = "invalid"


class ColumnSet:
    """Columns of a board in display order, each name present once."""

    def __init__(self, columns: Iterable[str] | None = None) -> None:
        """Initialize from existing names, dropping blanks and repeats.

        Args:
            columns: Initial column names; the built-in columns when None
        """
        self._columns: list[str] = []
        for name in BUILTIN_COLUMNS if columns is None else columns:
            self.add(name)

    def add(self, name: str) -> AddColumnResult:
        """Append a column at the end of the board.

        Args:
            name: Column name; surrounding whitespace is ignored

        Returns:
            ADDED, DUPLICATE when the name already exists, INVALID when blank
            or equal to the reserved unassigned bucket id
        """
        name = name.strip()
        if not name or name == UNASSIGNED:
            return AddColumnResult.INVALID
        if name in self._columns:
            return AddColumnResult.DUPLICATE
        self._columns.append(name)
        return AddColumnResult.ADDED

    def index(self, name: str) -> int:
        """Position of a column in display order."""
        return self._columns.index(name)

    def progress(self, name: str) -> float:
        """Board progress a column represents, from 0 to 100."""
        return (self.index(name) + 1) / len(self._columns) * 100

    def as_list(self) -> list[str]:
        """Copy of the column names in order."""
        return list(self._columns)

    def __contains__(self, name: object) -> bool:
        return name in self._columns

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._columns))

    def __len__(self) -> int:
        return len(self._columns)

    def __repr__(self) -> str:
        return f"ColumnSet({self._columns!r})"
