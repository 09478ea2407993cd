from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, Iterable, Optional

from loguru import logger

from inibind.core.errors import IdentifierError, IniSyntaxError, ProjectionError
from inibind.core.models import Scope
from inibind.core.sinks import NamespaceSink
from inibind.parsers.scanner import ParseSession
from inibind.parsers.types import (
    Assignment,
    Blank,
    EndOfStream,
    LineEvent,
    Malformed,
    SectionHeader,
)


def composite_id(root: str, section: str) -> str:
    return f"{root}_{section}"


class ProjectorState(str, Enum):
    NO_SECTION = "no_section"
    IN_SECTION = "in_section"
    FAILED = "failed"
    DONE = "done"


class NamespaceProjector:
    """
    Turns line events into sink calls.

    Every section header is validated before anything is written for it, so
    the sink never sees an illegal target name. The first error moves the
    projector to FAILED; from then on it refuses further events.
    """

    def __init__(self, sink: NamespaceSink, root: str, scope: Scope) -> None:
        self.sink = sink
        self.root = root
        self.scope = scope
        self.state = ProjectorState.NO_SECTION
        self.section: Optional[str] = None
        self.target: Optional[str] = None
        self.sections_seen = 0
        self.bindings = 0

        self._handlers: Dict[type, Callable[..., None]] = {
            Blank: self._on_blank,
            Malformed: self._on_malformed,
            SectionHeader: self._on_section,
            Assignment: self._on_assignment,
            EndOfStream: self._on_end,
        }

    def feed(self, event: LineEvent) -> None:
        if self.state in (ProjectorState.FAILED, ProjectorState.DONE):
            raise RuntimeError(f"projector is {self.state.value}; no more events accepted")

        handler = self._handlers[type(event)]
        try:
            handler(event)
        except ProjectionError as e:
            self.state = ProjectorState.FAILED
            if e.line is None:
                e.line = event.line
            logger.debug("projection failed: {}", e)
            raise

    def run(self, events: Iterable[LineEvent]) -> None:
        for event in events:
            self.feed(event)

    # -- handlers -----------------------------------------------------------

    def _on_blank(self, event: Blank) -> None:
        pass

    def _on_malformed(self, event: Malformed) -> None:
        raise IniSyntaxError(
            f"malformed line: {event.text.strip()!r}", line=event.line, text=event.text
        )

    def _on_section(self, event: SectionHeader) -> None:
        target = composite_id(self.root, event.name)
        if not self.sink.is_legal_identifier(target):
            raise IdentifierError(section=event.name, identifier=target, line=event.line)

        self.sink.register_toc_entry(event.name)
        self.sink.open_section(target, self.scope)

        self.section = event.name
        self.target = target
        self.sections_seen += 1
        self.state = ProjectorState.IN_SECTION

    def _on_assignment(self, event: Assignment) -> None:
        if self.state != ProjectorState.IN_SECTION or self.target is None:
            raise IniSyntaxError(
                "assignment outside any section",
                line=event.line,
                text=event.raw,
            )
        self.sink.bind(self.target, event.key, event.value)
        self.bindings += 1

    def _on_end(self, event: EndOfStream) -> None:
        self.state = ProjectorState.DONE


def project(
    session: ParseSession,
    sink: NamespaceSink,
    root: str,
    scope: Scope,
) -> NamespaceProjector:
    """Drive a projector over a session until EndOfStream or the first error."""
    projector = NamespaceProjector(sink, root, scope)
    for event in session.events():
        projector.feed(event)
        session.section = projector.section
    return projector
