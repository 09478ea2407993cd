from __future__ import annotations

import codecs
import re
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


# ================================
# Enums
# ================================


class Scope(str, Enum):
    LOCAL = "local"
    GLOBAL = "global"


class OutputFormat(str, Enum):
    SHELL = "shell"
    JSON = "json"


IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def is_legal_identifier(candidate: str) -> bool:
    """Shell variable-name grammar: a letter or underscore, then alphanumerics/underscores."""
    return bool(candidate) and IDENTIFIER_RE.match(candidate) is not None


# ================================
# Scanner options
# ================================

DEFAULT_COMMENT_PREFIXES = [";", "#"]
DEFAULT_INLINE_COMMENT_PREFIXES = [";"]
_ASCII_MARKERS = "[]=:;# \t\r\n"


class ScannerOptions(BaseModel):
    """
    How raw lines are decoded and which comment markers are honoured.

    Inline comment prefixes only count when preceded by whitespace,
    so `url = http://host;x` keeps its value intact.
    """

    encoding: str = "utf-8"
    comment_prefixes: List[str] = Field(
        default_factory=lambda: list(DEFAULT_COMMENT_PREFIXES)
    )
    inline_comment_prefixes: List[str] = Field(
        default_factory=lambda: list(DEFAULT_INLINE_COMMENT_PREFIXES)
    )

    @field_validator("encoding")
    @classmethod
    def _encoding_must_exist(cls, v: str) -> str:
        try:
            codecs.lookup(v)
        except LookupError as e:
            raise ValueError(f"unknown encoding: {v}") from e
        # lines are split on b"\n" and classified on ASCII markers
        try:
            ascii_compatible = _ASCII_MARKERS.encode(v) == _ASCII_MARKERS.encode("ascii")
        except (UnicodeError, LookupError):
            ascii_compatible = False
        if not ascii_compatible:
            raise ValueError(f"encoding must be ASCII-compatible: {v}")
        return v

    @field_validator("comment_prefixes", "inline_comment_prefixes")
    @classmethod
    def _prefixes_must_be_non_empty(cls, v: List[str]) -> List[str]:
        if any(not p for p in v):
            raise ValueError("comment prefixes must be non-empty strings")
        return v


# ================================
# Load config (defaults only)
# ================================


class LoadConfig(BaseModel):
    """
    Defaults live here.
    Repo/global/CLI overrides are merged by core/config.py.
    """

    root: Optional[str] = Field(
        default=None, description="Name of the TOC collection; sections become <root>_<section>."
    )
    global_scope: bool = Field(
        default=False, description="Always create collections with Global scope."
    )
    format: OutputFormat = OutputFormat.SHELL
    scanner: ScannerOptions = Field(default_factory=ScannerOptions)

    @field_validator("root")
    @classmethod
    def _root_must_be_identifier(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not is_legal_identifier(v):
            raise ValueError(f"`{v}': not a valid identifier")
        return v


def resolve_scope(*, in_function: bool, force_global: bool) -> Scope:
    """Local only makes sense inside a function context, and -g always wins."""
    if in_function and not force_global:
        return Scope.LOCAL
    return Scope.GLOBAL
