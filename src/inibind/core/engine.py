from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Optional

from loguru import logger

from inibind.core.errors import IdentifierError
from inibind.core.models import ScannerOptions, Scope
from inibind.core.projector import project
from inibind.core.sinks import NamespaceSink
from inibind.parsers.scanner import ParseSession, Stream


@dataclass(frozen=True)
class LoadSummary:
    root: str
    scope: Scope
    sections: int
    bindings: int
    lines: int
    duration_ms: int


def load_ini(
    stream: Stream,
    root: str,
    sink: NamespaceSink,
    *,
    scope: Scope = Scope.GLOBAL,
    options: Optional[ScannerOptions] = None,
) -> LoadSummary:
    """
    Parse INI text from `stream` into `sink`:
    open TOC -> scan line by line -> project each event.

    Stops at the first error and re-raises it (a ProjectionError subclass).
    Whatever was bound before the error stays bound. The stream is left open.
    """
    if not sink.is_legal_identifier(root):
        raise IdentifierError(section="", identifier=root)

    t0 = time.perf_counter()

    # Hosts that keep the TOC as a collection of its own create it up front,
    # so an input without sections still yields an (empty) TOC.
    open_toc = getattr(sink, "open_toc", None)
    if callable(open_toc):
        open_toc(root, scope)

    session = ParseSession(stream, options)
    projector = project(session, sink, root, scope)

    summary = LoadSummary(
        root=root,
        scope=scope,
        sections=projector.sections_seen,
        bindings=projector.bindings,
        lines=session.line_number,
        duration_ms=int((time.perf_counter() - t0) * 1000),
    )
    logger.debug(
        "loaded {} section header(s), {} binding(s) from {} line(s) into {}",
        summary.sections,
        summary.bindings,
        summary.lines,
        root,
    )
    return summary
