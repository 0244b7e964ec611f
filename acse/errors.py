"""Error reporting for the compiler."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import TextIO


@dataclass(frozen=True)
class FileLocation:
    """A zero-based line inside a named source file."""

    file: str | None = None
    row: int = -1

    def is_known(self) -> bool:
        """True when both the file and the line are known."""
        return self.file is not None and self.row >= 0


NULL_LOCATION = FileLocation()


class FatalError(Exception):
    """An unrecoverable error: compilation cannot continue."""


def format_message(location: FileLocation | None, category: str, message: str) -> str:
    """Build a diagnostic line, prefixed with the location when it is known."""
    if location is not None and location.is_known():
        return f"{location.file}:{location.row + 1}: {category}: {message}"
    return f"{category}: {message}"


def fatal_error(message: str) -> None:
    """Abort compilation by raising FatalError."""
    raise FatalError(message)


class ErrorLog:
    """Collects non-fatal compilation errors and writes them to a stream."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._count = 0

    def emit(self, location: FileLocation | None, message: str) -> None:
        """Report an error without stopping compilation."""
        stream = self._stream if self._stream is not None else sys.stderr
        print(format_message(location, "error", message), file=stream)
        self._count += 1

    def count(self) -> int:
        """Number of errors reported so far."""
        return self._count