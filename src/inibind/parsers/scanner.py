from __future__ import annotations

import re
from typing import IO, Iterator, Optional, Sequence, Union

from loguru import logger

from inibind.core.errors import IniIOError
from inibind.core.models import ScannerOptions
from inibind.parsers.types import (
    Assignment,
    Blank,
    EndOfStream,
    LineEvent,
    Malformed,
    SectionHeader,
)

_SECTION_RE = re.compile(r"^\[(.*)\]$")
_BOM = "\ufeff"

Stream = IO[Union[bytes, str]]


def strip_inline_comment(text: str, prefixes: Sequence[str]) -> str:
    """
    Cut `text` at the first comment prefix that follows whitespace.

    Examples:
      "v ; note"   -> "v "
      "a;b"        -> "a;b"
    """
    if not prefixes:
        return text
    prev_space = False
    for i, ch in enumerate(text):
        if prev_space and any(text.startswith(p, i) for p in prefixes):
            return text[:i]
        prev_space = ch.isspace()
    return text


def _first_separator(text: str) -> int:
    hits = [i for i in (text.find("="), text.find(":")) if i >= 0]
    return min(hits) if hits else -1


def classify(text: str, line: int, options: Optional[ScannerOptions] = None) -> LineEvent:
    """Classify one decoded line (without its terminator)."""
    opts = options or ScannerOptions()

    content = text.lstrip()
    if not content or any(content.startswith(p) for p in opts.comment_prefixes):
        return Blank(line=line)

    content = strip_inline_comment(content, opts.inline_comment_prefixes).strip()
    if not content:
        return Blank(line=line)

    m = _SECTION_RE.match(content)
    if m:
        return SectionHeader(line=line, name=m.group(1).strip())

    sep = _first_separator(content)
    if sep >= 0:
        return Assignment(
            line=line,
            key=content[:sep].strip(),
            value=content[sep + 1:].strip(),
            raw=text,
        )

    return Malformed(line=line, text=text)


class ParseSession:
    """
    One pass over one stream.

    The session owns the line counter and the "current section" slot; it
    does not own the stream and never closes it. readline() is used so a
    line is never truncated, whatever its length.
    """

    def __init__(self, stream: Stream, options: Optional[ScannerOptions] = None) -> None:
        self.stream = stream
        self.options = options or ScannerOptions()
        self.line_number = 0
        self.section: Optional[str] = None
        self._exhausted = False

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    def _read_raw(self) -> Optional[str]:
        try:
            raw = self.stream.readline()
        except (OSError, ValueError) as e:
            # ValueError covers undecodable text streams and closed files
            raise IniIOError(
                f"unable to read input: {e}", line=self.line_number + 1
            ) from e

        if not raw:
            return None
        if isinstance(raw, bytes):
            raw = raw.decode(self.options.encoding, errors="replace")
        return raw.rstrip("\r\n")

    def next_line(self) -> LineEvent:
        if self._exhausted:
            raise RuntimeError("next_line() called after EndOfStream")

        text = self._read_raw()
        if text is None:
            self._exhausted = True
            logger.debug("end of stream after {} line(s)", self.line_number)
            return EndOfStream(line=self.line_number)

        self.line_number += 1
        if self.line_number == 1 and text.startswith(_BOM):
            text = text[len(_BOM):]

        return classify(text, self.line_number, self.options)

    def events(self) -> Iterator[LineEvent]:
        """Yield events up to and including EndOfStream."""
        while True:
            event = self.next_line()
            yield event
            if isinstance(event, EndOfStream):
                return
