from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from inibind.cli.commands.load import run_load
from inibind.cli.ui import NamespaceRenderOptions, get_ui, render_error, render_namespace_tables, render_summary
from inibind.core.errors import ExitCode
from inibind.core.log import configure_logging


def show_cmd(
    path: Optional[Path] = typer.Argument(
        None, help="INI file to read (default: stdin)."
    ),
    toc: Optional[str] = typer.Option(
        None, "-a", "--toc", help="Name of the TOC collection."
    ),
    fd: Optional[int] = typer.Option(
        None, "-u", "--fd", help="Read from this already-open file descriptor."
    ),
    global_scope: bool = typer.Option(False, "-g", "--global", help="Force Global scope."),
    local: bool = typer.Option(False, "--local", help="Project with Local scope."),
    verbose: bool = typer.Option(False, "--verbose", help="Verbose output."),
) -> None:
    """Parse INI text and print the resulting namespace as a table."""
    configure_logging(verbose=verbose)
    ui = get_ui(verbose=verbose)

    outcome = run_load(
        ui, path=path, fd=fd, toc=toc, global_scope=global_scope, local=local
    )

    render_namespace_tables(ui.console, outcome.declarations, opts=NamespaceRenderOptions())

    if outcome.error is not None:
        render_error(ui.err_console, outcome.error)
        raise typer.Exit(code=int(ExitCode.ERROR))

    if ui.verbose and outcome.summary is not None:
        render_summary(ui.console, outcome.summary)

    raise typer.Exit(code=int(ExitCode.OK))
