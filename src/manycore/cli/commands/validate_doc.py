"""`manycore validate` command.

Runs the full construction pipeline on a document and prints `OK`, or the
single error describing the violated contract (exit code 1).
"""

from __future__ import annotations

import typer

from manycore.cli.commands._load import STRICT_BORDERS, STRICT_TASKS, load_system


def register(app: typer.Typer) -> None:
    @app.command("validate")
    def validate(
        path: str = typer.Argument(..., help="Path to a Manycore System XML file."),
        strict_tasks: bool = STRICT_TASKS,
        strict_borders: bool = STRICT_BORDERS,
    ) -> None:
        """Validate a Manycore System document."""
        load_system(path, strict_tasks=strict_tasks, strict_borders=strict_borders)
        typer.echo("OK")
