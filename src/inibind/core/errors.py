from __future__ import annotations

from enum import IntEnum
from typing import Optional


class ExitCode(IntEnum):
    OK = 0
    ERROR = 1
    USAGE = 2


class ProjectionError(Exception):
    """
    Base class for everything that aborts a projection.

    The first error stops the parse. Bindings already delivered to the sink
    are left in place.
    """

    def __init__(self, message: str, *, line: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.line = line

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"line {self.line}: {self.message}"


class IniIOError(ProjectionError):
    """The input stream could not be read. The OSError is chained as __cause__."""


class IniSyntaxError(ProjectionError):
    def __init__(self, message: str, *, line: int, text: str) -> None:
        super().__init__(message, line=line)
        self.text = text


class IdentifierError(ProjectionError):
    def __init__(self, *, section: str, identifier: str, line: Optional[int] = None) -> None:
        super().__init__(f"`{identifier}': not a valid identifier", line=line)
        self.section = section
        self.identifier = identifier


class SinkError(ProjectionError):
    """The namespace target rejected an open or a bind."""

    def __init__(self, message: str, *, target: str, line: Optional[int] = None) -> None:
        super().__init__(message, line=line)
        self.target = target
