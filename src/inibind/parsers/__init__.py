from __future__ import annotations

from inibind.parsers.scanner import ParseSession, classify, strip_inline_comment
from inibind.parsers.types import (
    Assignment,
    Blank,
    EndOfStream,
    LineEvent,
    Malformed,
    SectionHeader,
)

__all__ = [
    "Assignment",
    "Blank",
    "EndOfStream",
    "LineEvent",
    "Malformed",
    "ParseSession",
    "SectionHeader",
    "classify",
    "strip_inline_comment",
]
