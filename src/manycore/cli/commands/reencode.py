"""`manycore reencode` command.

Parses and validates a document, then writes its wire fields back as XML
(4-space indentation, derived fields omitted).
"""

from __future__ import annotations

from pathlib import Path

import typer

from manycore.cli.commands._load import STRICT_BORDERS, STRICT_TASKS, load_system
from manycore.codecs.manycore_xml import write_manycore_xml


def register(app: typer.Typer) -> None:
    @app.command("reencode")
    def reencode(
        path: str = typer.Argument(..., help="Path to a Manycore System XML file."),
        out: str = typer.Option(..., "--out", help="Output XML file path."),
        strict_tasks: bool = STRICT_TASKS,
        strict_borders: bool = STRICT_BORDERS,
    ) -> None:
        """Re-encode a validated document."""
        system = load_system(path, strict_tasks=strict_tasks, strict_borders=strict_borders)
        out_path = Path(out)
        write_manycore_xml(out_path, system)
        typer.echo(str(out_path))
