from __future__ import annotations

from dataclasses import dataclass

from rich.console import Console
from rich.theme import Theme

from inibind.cli.ui.formatters import (
    NamespaceRenderOptions,
    render_error,
    render_json,
    render_namespace_tables,
    render_shell,
    render_summary,
)

THEME = Theme(
    {
        "ok": "green",
        "err": "bold red",
        "muted": "dim",
        "section": "bold cyan",
        "key": "yellow",
        "scope.local": "magenta",
        "scope.global": "blue",
    }
)


@dataclass(frozen=True)
class UI:
    console: Console
    err_console: Console
    verbose: bool


def get_ui(*, verbose: bool = False) -> UI:
    # stdout carries data (shell/json); diagnostics go to stderr
    return UI(
        console=Console(theme=THEME, highlight=False),
        err_console=Console(theme=THEME, stderr=True, highlight=False),
        verbose=verbose,
    )


__all__ = [
    "THEME",
    "NamespaceRenderOptions",
    "UI",
    "get_ui",
    "render_error",
    "render_json",
    "render_namespace_tables",
    "render_shell",
    "render_summary",
]
