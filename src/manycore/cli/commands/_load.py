"""Shared document loading for CLI commands."""

from __future__ import annotations

from dataclasses import replace

import typer

from manycore.codecs.manycore_xml import read_manycore_xml
from manycore.core.errors import ManycoreError
from manycore.core.model import System
from manycore.core.options import ParseOptions


def load_system(path: str, *, strict_tasks: bool, strict_borders: bool) -> System:
    """Parse `path`; flags are applied on top of environment overrides.

    Any `ManycoreError` is printed to stderr and exits with code 1.
    """
    options = ParseOptions.from_env()
    if strict_tasks:
        options = replace(options, strict_task_allocation=True)
    if strict_borders:
        options = replace(options, strict_borders=True)

    try:
        return read_manycore_xml(path, options=options)
    except ManycoreError as e:
        typer.echo(f"error [{e.kind}]: {e}", err=True)
        raise typer.Exit(code=1) from e


STRICT_TASKS = typer.Option(False, "--strict-tasks", help="Fail when two cores declare the same allocated task.")
STRICT_BORDERS = typer.Option(False, "--strict-borders", help="Fail when a border point matches no edge core.")
