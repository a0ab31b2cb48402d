"""`manycore inspect` command.

Prints the derived metadata of a document as stable JSON: grid size,
observed routing algorithm, task->core map and the attribute schema.
"""

from __future__ import annotations

import json

import typer

from manycore.cli.commands._load import STRICT_BORDERS, STRICT_TASKS, load_system


def register(app: typer.Typer) -> None:
    @app.command("inspect")
    def inspect(
        path: str = typer.Argument(..., help="Path to a Manycore System XML file."),
        strict_tasks: bool = STRICT_TASKS,
        strict_borders: bool = STRICT_BORDERS,
    ) -> None:
        """Print derived model metadata as JSON."""
        system = load_system(path, strict_tasks=strict_tasks, strict_borders=strict_borders)

        report = {
            "rows": system.rows,
            "columns": system.columns,
            "routing_algo": system.routing_algo,
            # JSON object keys must be strings.
            "task_core_map": {str(k): v for k, v in sorted(system.task_core_map.items())},
            "attributes": system.attribute_schema.to_dict(),
        }
        typer.echo(json.dumps(report, indent=2, sort_keys=True))
