"""`manycore tables` command.

Writes the canonical analysis tables (cores, channels, tasks, edges) of a
document as CSV files under `--out-dir`.
"""

from __future__ import annotations

from pathlib import Path

import typer

from manycore.cli.commands._load import STRICT_BORDERS, STRICT_TASKS, load_system
from manycore.core.tables import system_tables


def register(app: typer.Typer) -> None:
    @app.command("tables")
    def tables(
        path: str = typer.Argument(..., help="Path to a Manycore System XML file."),
        out_dir: str = typer.Option(..., "--out-dir", help="Directory receiving <table>.csv files."),
        strict_tasks: bool = STRICT_TASKS,
        strict_borders: bool = STRICT_BORDERS,
    ) -> None:
        """Export analysis tables as CSV."""
        system = load_system(path, strict_tasks=strict_tasks, strict_borders=strict_borders)

        root = Path(out_dir)
        root.mkdir(parents=True, exist_ok=True)
        for name, df in system_tables(system).items():
            # lineterminator="\n" keeps output deterministic across platforms.
            df.to_csv(root / f"{name}.csv", index=False, lineterminator="\n")
        typer.echo(str(root))
