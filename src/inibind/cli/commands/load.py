from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import typer

from inibind.cli.ui import UI, get_ui, render_error, render_json, render_shell, render_summary
from inibind.cli.utils.inputs import open_input
from inibind.core.config import ConfigError, LoadedConfig, load_config
from inibind.core.engine import LoadSummary, load_ini
from inibind.core.errors import ExitCode, ProjectionError
from inibind.core.log import configure_logging
from inibind.core.models import OutputFormat, Scope, resolve_scope
from inibind.core.sinks import Declaration, MappingSink, ShellSink


@dataclass(frozen=True)
class LoadOutcome:
    declarations: List[Declaration]
    summary: Optional[LoadSummary]
    error: Optional[ProjectionError]
    loaded_cfg: LoadedConfig


def run_load(
    ui: UI,
    *,
    path: Optional[Path],
    fd: Optional[int],
    toc: Optional[str],
    global_scope: bool,
    local: bool,
    fmt: Optional[OutputFormat] = None,
) -> LoadOutcome:
    """
    Shared by `load` and `show`: resolve config, pick the scope, parse into a
    MappingSink. Projection errors are returned, not raised, so callers can
    still show what was bound before the failure.
    """
    cli_overrides: dict = {"load": {}}
    if toc is not None:
        cli_overrides["load"]["root"] = toc
    if global_scope:
        cli_overrides["load"]["global_scope"] = True
    if fmt is not None:
        cli_overrides["load"]["format"] = fmt.value

    try:
        loaded_cfg = load_config(start_dir=Path.cwd(), cli_overrides=cli_overrides)
    except ConfigError as e:
        raise typer.BadParameter(str(e)) from e
    cfg = loaded_cfg.config

    if cfg.root is None:
        raise typer.BadParameter("a TOC name is required (-a TOC or [load].root)")

    if ui.verbose:
        ui.err_console.print("[bold]Config sources:[/bold]")
        ui.err_console.print(f"  global: {loaded_cfg.global_path or '-'}")
        ui.err_console.print(f"  repo:   {loaded_cfg.repo_path or '-'}")

    scope = resolve_scope(in_function=local, force_global=cfg.global_scope)
    # shell output is eval'd by bash, which has stricter subscript rules
    sink_cls = ShellSink if cfg.format == OutputFormat.SHELL else MappingSink
    sink = sink_cls(global_ns={}, local_ns={} if scope == Scope.LOCAL else None)

    summary: Optional[LoadSummary] = None
    error: Optional[ProjectionError] = None
    with open_input(path, fd) as stream:
        try:
            summary = load_ini(stream, cfg.root, sink, scope=scope, options=cfg.scanner)
        except ProjectionError as e:
            error = e

    return LoadOutcome(
        declarations=sink.declarations(),
        summary=summary,
        error=error,
        loaded_cfg=loaded_cfg,
    )


def load_cmd(
    path: Optional[Path] = typer.Argument(
        None, help="INI file to read (default: stdin; '-' also means stdin)."
    ),
    toc: Optional[str] = typer.Option(
        None, "-a", "--toc", help="Name of the TOC collection; sections become TOC_<section>."
    ),
    fd: Optional[int] = typer.Option(
        None, "-u", "--fd", help="Read from this already-open file descriptor."
    ),
    global_scope: bool = typer.Option(
        False, "-g", "--global", help="Declare collections globally even inside a function."
    ),
    local: bool = typer.Option(
        False, "--local", help="Output is eval'd inside a shell function; declare locals."
    ),
    fmt: Optional[OutputFormat] = typer.Option(
        None, "--format", "-f", help="Output format (overrides config)."
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Debug logging on stderr."),
) -> None:
    """
    Read INI text and print declarations for the TOC and one collection per section.

    eval "$(inibind load -a conf < input.ini)"
    """
    configure_logging(verbose=verbose)
    ui = get_ui(verbose=verbose)

    outcome = run_load(
        ui, path=path, fd=fd, toc=toc, global_scope=global_scope, local=local, fmt=fmt
    )

    # Bindings made before an error are kept, so they are printed as well.
    if outcome.loaded_cfg.config.format == OutputFormat.JSON:
        typer.echo(render_json(outcome.declarations), nl=False)
    else:
        typer.echo(render_shell(outcome.declarations), nl=False)

    if outcome.error is not None:
        render_error(ui.err_console, outcome.error)
        raise typer.Exit(code=int(ExitCode.ERROR))

    if ui.verbose and outcome.summary is not None:
        render_summary(ui.err_console, outcome.summary)

    raise typer.Exit(code=int(ExitCode.OK))
