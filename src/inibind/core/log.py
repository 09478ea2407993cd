from __future__ import annotations

import sys
from typing import Optional, TextIO

from loguru import logger

LOG_FORMAT = "<dim>{time:HH:mm:ss}</dim> <level>{level: <7}</level> {message}"


def configure_logging(*, verbose: bool, sink: Optional[TextIO] = None) -> None:
    """
    Library logging is off by default; the CLI turns it on with --verbose.

    Records go to stderr so stdout stays clean for `eval "$(inibind load ...)"`.
    """
    logger.remove()
    if not verbose:
        logger.disable("inibind")
        return
    logger.add(sink or sys.stderr, format=LOG_FORMAT, level="DEBUG", colorize=False)
    logger.enable("inibind")
