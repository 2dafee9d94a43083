"""Per-entry diagnostics and logging setup.

Diagnostics are the human-readable lines a listing writes to standard error
when one entry or path fails. Logging is separate debug tracing, silent unless
``--debug`` is given.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TextIO

PROGRAM_NAME = "dirlist"
LOG_FORMAT = "%(name)s: %(message)s"

logger = logging.getLogger(__name__)


def write_text(stream: TextIO, text: str) -> None:
    """Write ``text`` to ``stream``, passing undecodable name bytes through as-is.

    Names read from the filesystem carry surrogate escapes for bytes that are
    not valid in the filesystem encoding, and a strict text stream refuses
    them. Such text goes to the underlying binary buffer as the original bytes.
    """
    try:
        stream.write(text)
    except UnicodeEncodeError:
        buffer = getattr(stream, "buffer", None)
        if buffer is None:
            encoding = getattr(stream, "encoding", None) or "utf-8"
            stream.write(text.encode(encoding, "backslashreplace").decode(encoding))
        else:
            stream.flush()
            buffer.write(os.fsencode(text))


class Diagnostics:
    """Write one line per failure to ``stream`` (standard error by default)."""

    def __init__(self, stream: TextIO | None = None, program: str = PROGRAM_NAME) -> None:
        self._stream = stream
        self.program = program
        self.count = 0

    @property
    def stream(self) -> TextIO:
        # Resolved late so redirected sys.stderr is honored.
        return self._stream if self._stream is not None else sys.stderr

    def report(self, message: str) -> None:
        self.count += 1
        logger.debug("diagnostic: %s", message)
        write_text(self.stream, f"{self.program}: {message}\n")

    def report_error(self, context: str, exc: BaseException) -> None:
        self.report(f"{context}: {exc}")


def setup_logging(debug: bool = False, stream: TextIO | None = None) -> None:
    """Install a single stderr handler on the package logger."""
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger = logging.getLogger(PROGRAM_NAME)
    package_logger.handlers = []
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    package_logger.propagate = False


__all__ = [
    "PROGRAM_NAME",
    "write_text",
    "Diagnostics",
    "setup_logging",
]
