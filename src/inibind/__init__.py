"""Project INI sections and keys into a two-level namespace."""

from loguru import logger

from inibind.core.engine import LoadSummary, load_ini
from inibind.core.errors import (
    IdentifierError,
    IniIOError,
    IniSyntaxError,
    ProjectionError,
    SinkError,
)
from inibind.core.models import Scope
from inibind.core.sinks import MappingSink, NamespaceSink, ShellSink

__all__ = [
    "IdentifierError",
    "IniIOError",
    "IniSyntaxError",
    "LoadSummary",
    "MappingSink",
    "NamespaceSink",
    "ProjectionError",
    "Scope",
    "ShellSink",
    "SinkError",
    "__version__",
    "load_ini",
]

__version__ = "0.1.0"

logger.disable("inibind")
