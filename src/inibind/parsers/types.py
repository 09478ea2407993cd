from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Blank:
    """Empty line or whole-line comment."""
    line: int


@dataclass(frozen=True)
class SectionHeader:
    line: int
    name: str


@dataclass(frozen=True)
class Assignment:
    """A `key = value` or `key : value` line, both sides trimmed."""
    line: int
    key: str
    value: str
    raw: str = ""


@dataclass(frozen=True)
class Malformed:
    line: int
    text: str


@dataclass(frozen=True)
class EndOfStream:
    """Emitted once, after the last line. `line` is the last line number read."""
    line: int


LineEvent = Union[Blank, SectionHeader, Assignment, Malformed, EndOfStream]
