from __future__ import annotations

import os
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator, Optional

import typer


def validate_fd(fd: int) -> int:
    if fd < 0:
        raise typer.BadParameter(f"{fd}: invalid file descriptor specification")
    try:
        os.fstat(fd)
    except OSError as e:
        raise typer.BadParameter(f"{fd}: invalid file descriptor: {e.strerror}") from e
    return fd


@contextmanager
def open_input(path: Optional[Path] = None, fd: Optional[int] = None) -> Iterator[IO[bytes]]:
    """
    Resolve the input source: a path, an inherited descriptor, or stdin.

    Descriptors and stdin belong to the caller and stay open afterwards;
    only a file we opened ourselves is closed.
    """
    if path is not None and fd is not None:
        raise typer.BadParameter("pass either a PATH or --fd, not both")

    if fd is not None:
        stream = os.fdopen(validate_fd(fd), "rb", closefd=False)
        try:
            yield stream
        finally:
            stream.close()
        return

    if path is None or str(path) == "-":
        yield getattr(sys.stdin, "buffer", sys.stdin)
        return

    try:
        fh = path.open("rb")
    except OSError as e:
        raise typer.BadParameter(f"{path}: {e.strerror}") from e
    with fh:
        yield fh
