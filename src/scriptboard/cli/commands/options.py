"""Option types shared by CLI commands."""

from typing import Annotated

import typer

ProjectOption = Annotated[
    str,
    typer.Option(
        "--project",
        "-p",
        help="Project id",
        envvar="SCRIPTBOARD_PROJECT",
    ),
]

JsonOption = Annotated[bool, typer.Option("--json", help="Output as JSON")]

DEFAULT_PROJECT = "default"
