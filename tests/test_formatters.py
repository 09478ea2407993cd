"""Rendering of a materialized namespace."""

from __future__ import annotations

import json

from rich.console import Console

from inibind.cli.ui import THEME
from inibind.cli.ui.formatters import (
    declare_flags,
    render_error,
    render_json,
    render_namespace_tables,
    render_shell,
)
from inibind.core.errors import IdentifierError, IniSyntaxError
from inibind.core.models import Scope
from inibind.core.sinks import Declaration


def _decls(scope: Scope = Scope.GLOBAL) -> list:
    return [
        Declaration(name="conf", scope=scope, values={"sec1": "true"}),
        Declaration(name="conf_sec1", scope=scope, values={"foo": "bar baz", "it's": "x"}),
    ]


def test_declare_flags_follow_scope() -> None:
    assert declare_flags(Scope.LOCAL) == "-A"
    assert declare_flags(Scope.GLOBAL) == "-gA"


def test_render_shell_quotes_keys_and_values() -> None:
    out = render_shell(_decls())

    assert out.splitlines() == [
        "declare -gA conf=([sec1]=true)",
        "declare -gA conf_sec1=([foo]='bar baz' ['it'\"'\"'s']=x)",
    ]


def test_render_shell_local_scope_and_empty_collection() -> None:
    out = render_shell([Declaration(name="conf", scope=Scope.LOCAL, values={})])

    assert out == "declare -A conf=()\n"


def test_render_shell_of_nothing_is_empty() -> None:
    assert render_shell([]) == ""


def test_render_json_maps_collection_names_to_values() -> None:
    assert json.loads(render_json(_decls())) == {
        "conf": {"sec1": "true"},
        "conf_sec1": {"foo": "bar baz", "it's": "x"},
    }


def test_render_namespace_tables_lists_sections_and_keys() -> None:
    console = Console(theme=THEME, record=True, width=120)

    render_namespace_tables(console, _decls())

    text = console.export_text()
    assert "conf_sec1" in text
    assert "foo" in text
    assert "bar baz" in text


def test_render_error_shows_offending_line() -> None:
    console = Console(theme=THEME, record=True, width=120)

    render_error(console, IniSyntaxError("malformed line: 'badline'", line=3, text="badline"))

    text = console.export_text()
    assert "line 3" in text
    assert "> badline" in text


def test_render_error_shows_rejected_section() -> None:
    console = Console(theme=THEME, record=True, width=120)

    render_error(console, IdentifierError(section="bad name!", identifier="conf_bad name!", line=1))

    text = console.export_text()
    assert "conf_bad name!" in text
    assert "section: [bad name!]" in text
