"""Shared pytest fixtures for the inibind test suite."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Callable

import pytest

from inibind.core.sinks import MappingSink, RecordingSink

EXAMPLE_INI = "[sec1]\nfoo = bar\n\n[sec2]\nbiz = baz\n"


@pytest.fixture
def stream_of() -> Callable[[str], io.BytesIO]:
    """Build a binary stream from INI text."""

    def _make(text: str) -> io.BytesIO:
        return io.BytesIO(text.encode("utf-8"))

    return _make


@pytest.fixture
def mapping_sink() -> MappingSink:
    return MappingSink(global_ns={}, local_ns={})


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run with no global config and cwd in an empty directory."""

    home = tmp_path / "home"
    home.mkdir()
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    return work
