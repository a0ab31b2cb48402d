"""manycore CLI entrypoint.

Minimal Typer application wrapping the codec + construction pipeline.
"""

from __future__ import annotations

import logging

import typer

app = typer.Typer(
    name="manycore",
    add_completion=False,
    no_args_is_help=True,
    help="Manycore System XML model command line interface.",
)


@app.callback()
def _callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log pipeline stages to stderr."),
) -> None:
    """manycore CLI."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@app.command("version")
def version() -> None:
    """Print the installed manycore version."""
    from manycore import __version__

    typer.echo(__version__)


def _register_commands() -> None:
    """Register CLI subcommands.

    Importing these modules must remain lightweight so `manycore --help` is fast.
    """
    from manycore.cli.commands import export_tables as export_tables_cmd
    from manycore.cli.commands import inspect_doc as inspect_doc_cmd
    from manycore.cli.commands import reencode as reencode_cmd
    from manycore.cli.commands import validate_doc as validate_doc_cmd

    validate_doc_cmd.register(app)
    inspect_doc_cmd.register(app)
    reencode_cmd.register(app)
    export_tables_cmd.register(app)


_register_commands()
