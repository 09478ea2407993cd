from __future__ import annotations

import json
import shlex
from dataclasses import dataclass
from typing import Optional, Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from inibind.core.engine import LoadSummary
from inibind.core.errors import IdentifierError, IniSyntaxError, ProjectionError
from inibind.core.models import Scope
from inibind.core.sinks import Declaration


# ----------------------------
# Machine-readable output
# ----------------------------


def declare_flags(scope: Scope) -> str:
    # inside a function plain `declare` is already local; -g escapes to global
    return "-A" if scope == Scope.LOCAL else "-gA"


def render_shell(declarations: Sequence[Declaration]) -> str:
    """
    Bash associative-array declarations, one per collection:

      declare -gA conf=([sec1]=true)
      declare -gA conf_sec1=([foo]=bar)
    """
    lines = []
    for d in declarations:
        items = " ".join(
            f"[{shlex.quote(k)}]={shlex.quote(v)}" for k, v in d.values.items()
        )
        lines.append(f"declare {declare_flags(d.scope)} {d.name}=({items})")
    return "\n".join(lines) + ("\n" if lines else "")


def render_json(declarations: Sequence[Declaration]) -> str:
    return json.dumps({d.name: d.values for d in declarations}, indent=2) + "\n"


# ----------------------------
# Human output
# ----------------------------


def _short(s: str, max_len: int = 140) -> str:
    s = s or ""
    if len(s) <= max_len:
        return s
    return s[:max_len] + "…"


@dataclass(frozen=True)
class NamespaceRenderOptions:
    title: Optional[str] = None
    max_value_len: int = 120
    show_scope: bool = True


def render_namespace_tables(
    console: Console,
    declarations: Sequence[Declaration],
    *,
    opts: Optional[NamespaceRenderOptions] = None,
) -> None:
    opts = opts or NamespaceRenderOptions()

    if not declarations:
        console.print("[muted]Nothing loaded.[/muted]")
        return

    toc, sections = declarations[0], declarations[1:]

    title = opts.title or f"{toc.name} ({len(toc.values)} section(s))"
    table = Table(title=title, show_lines=False)
    table.add_column("Collection", style="section", no_wrap=True)
    if opts.show_scope:
        table.add_column("Scope", no_wrap=True)
    table.add_column("Key", style="key")
    table.add_column("Value")

    for d in sections:
        scope_txt = Text(d.scope.value, style=f"scope.{d.scope.value}")
        if not d.values:
            row = [d.name, scope_txt, "", Text("(empty)", style="muted")]
            table.add_row(*(row if opts.show_scope else [row[0], *row[2:]]))
            continue
        for i, (key, value) in enumerate(d.values.items()):
            name = d.name if i == 0 else ""
            row = [name, scope_txt if i == 0 else "", key, _short(value, opts.max_value_len)]
            table.add_row(*(row if opts.show_scope else [row[0], *row[2:]]))

    console.print(table)


def render_summary(console: Console, summary: LoadSummary) -> None:
    console.print(f"[bold]Root:[/bold] {summary.root} ({summary.scope.value})")
    console.print(f"  lines read:      {summary.lines}")
    console.print(f"  section headers: {summary.sections}")
    console.print(f"  bindings:        {summary.bindings}")
    console.print(f"  duration:        {summary.duration_ms} ms")


def render_error(console: Console, err: ProjectionError) -> None:
    console.print(Text(f"inibind: {err}", style="err"))
    if isinstance(err, IniSyntaxError) and err.text:
        console.print(Text(f"  > {_short(err.text)}", style="muted"))
    elif isinstance(err, IdentifierError) and err.section:
        console.print(Text(f"  section: [{err.section}]", style="muted"))
