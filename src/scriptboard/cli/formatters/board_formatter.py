"""Text and JSON rendering of boards, schedules and production stats."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from scriptboard.board.columns import UNASSIGNED, ColumnSet
from scriptboard.board.models import Scene, TimeOfDay
from scriptboard.cli.formatters.base import OutputFormat, OutputFormatter
from scriptboard.cli.formatters.json_formatter import JsonFormatter
from scriptboard.parser import parse_slugline
from scriptboard.schedule import ProductionStats

_COMPLEXITY_STYLES = {"Low": "green", "Medium": "yellow", "High": "red"}


def time_symbol(scene: Scene) -> str:
    """Scene's time-of-day symbol, falling back to its slugline."""
    if scene.time_of_day is not None:
        return scene.time_of_day.value
    word = parse_slugline(scene.slugline).time_of_day
    if word:
        try:
            return TimeOfDay(word).value
        except ValueError:
            pass
    return " "


def scene_line(scene: Scene) -> str:
    """One-line summary of a scene card."""
    number = escape(scene.scene_number or "-")
    slugline = escape(scene.slugline or "(untitled)")
    if scene.completed:
        slugline = f"[strike]{slugline}[/strike]"

    parts = [f"[bold]{number:>6}[/bold]", time_symbol(scene), slugline]
    if scene.analysis is not None:
        complexity = scene.analysis.complexity.value
        parts.append(f"[{_COMPLEXITY_STYLES[complexity]}]{complexity}[/]")
    if scene.cast_size:
        parts.append(f"cast {scene.cast_size}")
    if scene.shoot_date:
        parts.append(f"[cyan]{escape(scene.shoot_date)}[/cyan]")
    parts.append(f"[dim]{scene.id[:8]}[/dim]")
    return "  ".join(parts)


class BoardFormatter(OutputFormatter[dict[str, list[Scene]]]):
    """Renders a board: columns in order with their sorted scenes."""

    def __init__(self, console: Console | None = None, columns: ColumnSet | None = None) -> None:
        super().__init__(console)
        self.columns = columns

    def format(
        self,
        data: dict[str, list[Scene]],
        format_type: OutputFormat = OutputFormat.TEXT,
    ) -> str:
        if format_type == OutputFormat.JSON:
            return JsonFormatter().format(
                {column: [scene.model_dump(mode="json") for scene in scenes] for column, scenes in data.items()}
            )

        lines: list[str] = []
        for column, scenes in data.items():
            title = "Unassigned" if column == UNASSIGNED else escape(column.replace("_", " ").title())
            header = f"[bold cyan]{title}[/bold cyan] ({len(scenes)})"
            if self.columns is not None and column in self.columns:
                header += f" [dim]{self.columns.progress(column):.0f}%[/dim]"
            lines.append(header)
            if scenes:
                lines.extend(f"  {scene_line(scene)}" for scene in scenes)
            else:
                lines.append("  [dim]No scenes[/dim]")
            lines.append("")
        return "\n".join(lines).rstrip()


class ScheduleFormatter(OutputFormatter[dict[str, list[Scene]]]):
    """Renders the shooting calendar grouped by date."""

    def format(
        self,
        data: dict[str, list[Scene]],
        format_type: OutputFormat = OutputFormat.TEXT,
    ) -> str:
        if format_type == OutputFormat.JSON:
            return JsonFormatter().format(
                {
                    shoot_date: [scene.model_dump(mode="json") for scene in scenes]
                    for shoot_date, scenes in data.items()
                }
            )
        if not data:
            return "[yellow]No scenes have a shoot date yet[/yellow]"

        lines: list[str] = []
        for shoot_date, scenes in data.items():
            lines.append(f"[bold cyan]{escape(shoot_date)}[/bold cyan]")
            for scene in scenes:
                info = parse_slugline(scene.slugline)
                place = " ".join(part for part in (info.scene_type, info.location) if part)
                lines.append(
                    f"  [bold]{escape(scene.scene_number or '-'):>6}[/bold]  {time_symbol(scene)}  "
                    f"{escape(place or scene.slugline or '(untitled)')}  "
                    f"[dim]{escape(scene.effective_status)}[/dim]"
                )
        return "\n".join(lines)


class StatsFormatter(OutputFormatter[tuple[ProductionStats, list[Scene]]]):
    """Renders production progress and upcoming shoots."""

    def format(
        self,
        data: tuple[ProductionStats, list[Scene]],
        format_type: OutputFormat = OutputFormat.TEXT,
    ) -> str:
        stats, upcoming = data
        if format_type == OutputFormat.JSON:
            return JsonFormatter().format(
                {
                    "total": stats.total,
                    "completed": stats.completed,
                    "in_progress": stats.in_progress,
                    "waiting": stats.waiting,
                    "progress": stats.progress,
                    "upcoming": [scene.model_dump(mode="json") for scene in upcoming],
                }
            )

        lines = [
            "[bold cyan]Production Progress[/bold cyan]",
            f"  Progress: {stats.progress}%",
            f"  Scenes: {stats.total}",
            f"  Completed: {stats.completed}",
            f"  In progress: {stats.in_progress}",
            f"  Waiting: {stats.waiting}",
        ]
        if upcoming:
            lines.append("")
            lines.append("[bold cyan]Upcoming Shoots[/bold cyan]")
            lines.extend(
                f"  {escape(scene.shoot_date or '')}  {escape(scene.slugline or '(untitled)')}"
                for scene in upcoming
            )
        return "\n".join(lines)
