from __future__ import annotations

import typer
from rich.console import Console

from inibind import __version__
from inibind.cli.commands.init import init_cmd
from inibind.cli.commands.load import load_cmd
from inibind.cli.commands.show import show_cmd

app = typer.Typer(
    name="inibind",
    help="Read an INI config into a table of contents plus one associative array per section.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"inibind {__version__}")
        raise typer.Exit(0)


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", callback=_version_callback
    ),
) -> None:
    pass


app.command("load")(load_cmd)
app.command("show")(show_cmd)
app.command("init")(init_cmd)
