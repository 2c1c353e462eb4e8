"""Console logging with an in-memory copy of every message.

``--silent`` only removes the console handler; the buffer keeps recording so
the full log can still be inspected or replayed afterwards.
"""

from __future__ import annotations

import logging
import sys
from typing import List

LOGGER_NAME = "commitpaint"
SEPARATOR = "--------------"

_pending: List[str] = []


class LogBuffer(logging.Handler):
    """Handler that stores formatted records instead of emitting them."""

    def __init__(self) -> None:
        super().__init__()
        self.messages: List[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(self.format(record))

    def get_log(self) -> List[str]:
        return list(self.messages)

    def print_log(self) -> None:
        for message in self.messages:
            print(message)


def prelog(message: str) -> None:
    """Queue a message produced before :func:`configure_logging` runs."""
    _pending.append(message)


def configure_logging(silent: bool = False, stream=None, error_stream=None) -> LogBuffer:
    """Attach a fresh buffer and console handlers to the package logger.

    Errors always reach ``error_stream``; everything else is printed to
    ``stream`` unless ``silent``.

    Queued messages are flushed first, followed by a separator line.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False

    formatter = logging.Formatter("%(message)s")
    buffer = LogBuffer()
    buffer.setFormatter(formatter)
    logger.addHandler(buffer)

    if not silent:
        console = logging.StreamHandler(stream or sys.stdout)
        console.setFormatter(formatter)
        console.addFilter(lambda record: record.levelno < logging.ERROR)
        logger.addHandler(console)

    errors = logging.StreamHandler(error_stream or sys.stderr)
    errors.setFormatter(formatter)
    errors.setLevel(logging.ERROR)
    logger.addHandler(errors)

    while _pending:
        logger.warning(_pending.pop(0))
    logger.info(SEPARATOR)
    return buffer

