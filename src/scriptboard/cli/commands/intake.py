"""Script import command."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from scriptboard.cli.commands.options import DEFAULT_PROJECT, JsonOption, ProjectOption
from scriptboard.cli.utils.cli_handler import CLIHandler, async_cli_command
from scriptboard.cli.utils.context import build_service, settings_from_context, store_session
from scriptboard.config import get_logger
from scriptboard.exceptions import StoreError

logger = get_logger(__name__)
console = Console()


@async_cli_command
async def import_command(
    ctx: typer.Context,
    script_file: Annotated[
        Path,
        typer.Argument(
            help="Screenplay text file to import",
            exists=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    project: ProjectOption = DEFAULT_PROJECT,
    ai: Annotated[
        bool,
        typer.Option("--ai", help="Split and analyse scenes with the configured LLM"),
    ] = False,
    json_output: JsonOption = False,
) -> None:
    """Import a screenplay as unscheduled scenes.

    Scene headings (INT., EXT., I/E., INT/EXT.) start new scenes; repeated
    scenes are skipped. With --ai the model splits the script and analyses
    every scene in one pass.

    Examples:
        scriptboard import pilot.txt --project pilot
        scriptboard import pilot.txt --project pilot --ai
    """
    handler = CLIHandler(console)
    settings = settings_from_context(ctx)
    script_text = script_file.read_text(encoding="utf-8")

    with store_session(settings) as store:
        service = build_service(store, settings, with_ai=ai)
        try:
            if ai:
                result = await service.parse_with_ai(project, script_text)
            else:
                result = await service.import_script(project, script_text)
        finally:
            if service.analyzer is not None:
                await service.analyzer.cleanup()

    if not result.success:
        handler.handle_error(StoreError(message=result.error or "Import failed"), json_output)

    logger.info("Import command finished", project_id=project, scenes=result.scene_count)
    if result.scene_count == 0 and not json_output:
        console.print("[yellow]No scenes found. Scene headings start with INT., EXT., I/E. or INT/EXT.[/yellow]")
        return
    handler.handle_success(
        f"Imported {result.scene_count} scenes into '{project}'",
        {"project": project, "scene_ids": result.scene_ids},
        json_output,
    )
