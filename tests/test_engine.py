"""End-to-end projection behaviour through `load_ini` and `MappingSink`."""

from __future__ import annotations

import io
from typing import Callable

import pytest

from inibind import (
    IdentifierError,
    IniIOError,
    IniSyntaxError,
    MappingSink,
    Scope,
    SinkError,
    load_ini,
)
from inibind.core.sinks import RecordingSink
from tests.conftest import EXAMPLE_INI

StreamOf = Callable[[str], io.BytesIO]


def test_end_to_end_example(stream_of: StreamOf) -> None:
    sink = MappingSink()

    summary = load_ini(stream_of(EXAMPLE_INI), "conf", sink)

    assert sink.toc() == {"sec1": "true", "sec2": "true"}
    assert sink.section("conf_sec1") == {"foo": "bar"}
    assert sink.section("conf_sec2") == {"biz": "baz"}
    assert (summary.sections, summary.bindings, summary.lines) == (2, 2, 5)
    assert summary.scope == Scope.GLOBAL


def test_round_trip_keeps_last_declared_value_per_key(stream_of: StreamOf) -> None:
    text = "[a]\nx = 1\ny = 2\nx = 3\n[b]\nz = 4\n"
    sink = MappingSink()

    load_ini(stream_of(text), "cfg", sink)

    assert set(sink.toc()) == {"a", "b"}
    assert sink.section("cfg_a") == {"x": "3", "y": "2"}
    assert sink.section("cfg_b") == {"z": "4"}


def test_repeated_section_merges_into_one_toc_entry(stream_of: StreamOf) -> None:
    text = "[A]\nk1 = first\nshared = old\n[B]\nb = 1\n[A]\nk2 = second\nshared = new\n"
    sink = MappingSink()

    load_ini(stream_of(text), "conf", sink)

    assert sink.toc() == {"A": "true", "B": "true"}
    assert sink.section("conf_A") == {"k1": "first", "k2": "second", "shared": "new"}


def test_stop_on_first_error_keeps_earlier_bindings(stream_of: StreamOf) -> None:
    sink = MappingSink()

    with pytest.raises(IniSyntaxError) as excinfo:
        load_ini(stream_of("[good]\nk=v\nbadline\n[also_good]\nk2=v2\n"), "conf", sink)

    assert excinfo.value.line == 3
    assert excinfo.value.text == "badline"
    assert sink.toc() == {"good": "true"}
    assert sink.section("conf_good") == {"k": "v"}
    assert "conf_also_good" not in sink.global_ns


def test_identifier_rejection_leaves_prior_sections(stream_of: StreamOf) -> None:
    sink = MappingSink()

    with pytest.raises(IdentifierError) as excinfo:
        load_ini(stream_of("[ok]\na = 1\n[bad name!]\nb = 2\n"), "conf", sink)

    assert excinfo.value.identifier == "conf_bad name!"
    assert excinfo.value.line == 3
    assert sink.toc() == {"ok": "true"}
    assert sink.section("conf_ok") == {"a": "1"}
    assert "conf_bad name!" not in sink.global_ns


def test_assignment_before_section_fails_at_line_one(stream_of: StreamOf) -> None:
    with pytest.raises(IniSyntaxError) as excinfo:
        load_ini(stream_of("k=v\n[sec]\n"), "conf", MappingSink())

    assert excinfo.value.line == 1


def test_empty_input_still_creates_the_toc(stream_of: StreamOf) -> None:
    sink = MappingSink()

    summary = load_ini(stream_of("; nothing here\n\n"), "conf", sink)

    assert sink.global_ns == {"conf": {}}
    assert summary.sections == 0


def test_local_scope_materializes_into_local_namespace(stream_of: StreamOf) -> None:
    sink = MappingSink(global_ns={}, local_ns={})

    load_ini(stream_of(EXAMPLE_INI), "conf", sink, scope=Scope.LOCAL)

    assert sink.global_ns == {}
    assert set(sink.local_ns) == {"conf", "conf_sec1", "conf_sec2"}


def test_illegal_root_is_rejected_before_reading(stream_of: StreamOf) -> None:
    stream = stream_of(EXAMPLE_INI)

    with pytest.raises(IdentifierError):
        load_ini(stream, "1conf", MappingSink())

    assert stream.tell() == 0


def test_sink_error_aborts_the_parse(stream_of: StreamOf) -> None:
    sink = MappingSink(global_ns={"conf_b": "scalar"})

    with pytest.raises(SinkError) as excinfo:
        load_ini(stream_of("[a]\nx=1\n[b]\ny=2\n"), "conf", sink)

    assert excinfo.value.line == 3
    assert sink.section("conf_a") == {"x": "1"}
    assert sink.global_ns["conf_b"] == "scalar"


def test_io_error_surfaces_with_cause() -> None:
    class _Closed(io.BytesIO):
        def readline(self, size: int = -1) -> bytes:  # type: ignore[override]
            raise OSError(5, "Input/output error")

    with pytest.raises(IniIOError) as excinfo:
        load_ini(_Closed(), "conf", MappingSink())

    assert isinstance(excinfo.value.__cause__, OSError)


def test_nested_invocations_use_independent_sessions(stream_of: StreamOf) -> None:
    """A sink may itself trigger another load while the outer one is running."""

    inner = MappingSink()

    class _NestingSink(MappingSink):
        def open_section(self, composite_id: str, scope: Scope) -> None:
            super().open_section(composite_id, scope)
            load_ini(stream_of("[x]\ny = z\n"), "inner", inner)

    outer = _NestingSink()
    load_ini(stream_of(EXAMPLE_INI), "conf", outer)

    assert outer.section("conf_sec2") == {"biz": "baz"}
    assert inner.section("inner_x") == {"y": "z"}


def test_root_legality_is_decided_by_the_sink(stream_of: StreamOf) -> None:
    """The host's predicate governs the root as well as the composite ids."""

    sink = RecordingSink(legal=lambda candidate: all(c.isalnum() or c in "-_" for c in candidate))

    load_ini(stream_of("[a]\nk=v\n"), "my-conf", sink)

    assert sink.calls == [
        ("toc", "a"),
        ("open", "my-conf_a", Scope.GLOBAL),
        ("bind", "my-conf_a", "k", "v"),
    ]


def test_root_rejected_by_the_sink_fails_before_any_call(stream_of: StreamOf) -> None:
    sink = RecordingSink(legal=lambda candidate: candidate.islower())

    with pytest.raises(IdentifierError) as excinfo:
        load_ini(stream_of("[a]\nk=v\n"), "CONF", sink)

    assert excinfo.value.identifier == "CONF"
    assert sink.calls == []
