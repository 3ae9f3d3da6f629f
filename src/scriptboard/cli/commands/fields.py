"""Custom field commands."""

from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from scriptboard.board.models import FieldType
from scriptboard.cli.commands.options import DEFAULT_PROJECT, JsonOption, ProjectOption
from scriptboard.cli.utils.cli_handler import CLIHandler, async_cli_command
from scriptboard.cli.utils.context import build_service, settings_from_context, store_session
from scriptboard.exceptions import ValidationError

console = Console()

field_app = typer.Typer(
    name="field",
    help="Manage custom scene fields",
    pretty_exceptions_enable=False,
    add_completion=False,
)


def parse_option(value: str) -> dict[str, str]:
    """Read an option given as LABEL or LABEL:COLOR."""
    label, _, color = value.partition(":")
    option = {"label": label.strip()}
    if color.strip():
        option["color"] = color.strip()
    return option


@field_app.command(name="add")
@async_cli_command
async def add_field(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Field name")],
    field_type: Annotated[
        FieldType, typer.Option("--type", "-t", help="Value type")
    ] = FieldType.SHORT_TEXT,
    options: Annotated[
        list[str] | None,
        typer.Option("--option", "-o", help="Select option as LABEL or LABEL:COLOR"),
    ] = None,
    project: ProjectOption = DEFAULT_PROJECT,
    json_output: JsonOption = False,
) -> None:
    """Define a custom field.

    Examples:
        scriptboard field add Location --type short_text
        scriptboard field add Priority --type single_select -o High:red -o Low:green
    """
    handler = CLIHandler(console)
    settings = settings_from_context(ctx)
    with store_session(settings) as store:
        service = build_service(store, settings)
        definition = await service.create_field(
            project,
            name,
            field_type.value,
            [parse_option(value) for value in options or []],
        )

    handler.handle_success(f"Created field '{definition.name}' ({definition.id[:8]})", definition, json_output)


@field_app.command(name="list")
@async_cli_command
async def list_fields(
    ctx: typer.Context,
    project: ProjectOption = DEFAULT_PROJECT,
    json_output: JsonOption = False,
) -> None:
    """List custom field definitions."""
    handler = CLIHandler(console)
    settings = settings_from_context(ctx)
    with store_session(settings) as store:
        definitions = await build_service(store, settings).list_fields(project)

    if json_output:
        print(handler.json_formatter.format(definitions))
        return
    if not definitions:
        console.print("[yellow]No custom fields defined[/yellow]")
        return
    for definition in definitions:
        labels = ", ".join(escape(label) for label in definition.option_labels())
        console.print(
            f"[bold]{escape(definition.name)}[/bold]  {definition.type.value}"
            f"{f'  [{labels}]' if labels else ''}  [dim]{definition.id[:8]}[/dim]"
        )


@field_app.command(name="delete")
@async_cli_command
async def delete_field(
    ctx: typer.Context,
    field_id: Annotated[str, typer.Argument(help="Field id")],
    purge: Annotated[
        bool, typer.Option("--purge", help="Also remove the field's values from scenes")
    ] = False,
    project: ProjectOption = DEFAULT_PROJECT,
    json_output: JsonOption = False,
) -> None:
    """Delete a custom field definition.

    Values stored on scenes are kept unless --purge is given.
    """
    handler = CLIHandler(console)
    settings = settings_from_context(ctx)
    with store_session(settings) as store:
        service = build_service(store, settings)
        matches = [d.id for d in await service.list_fields(project) if d.id.startswith(field_id)]
        if len(matches) != 1:
            handler.handle_error(
                ValidationError(
                    message=f"No single custom field matches '{field_id}'",
                    hint="Run 'scriptboard field list' to see field ids",
                ),
                json_output,
            )
        purged = await service.delete_field(project, matches[0], purge=purge)

    handler.handle_success(
        f"Deleted field {matches[0][:8]}" + (f", purged values from {purged} scenes" if purge else ""),
        {"field_id": matches[0], "purged": purged},
        json_output,
    )
