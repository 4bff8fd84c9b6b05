from __future__ import annotations

"""
Exception Hierarchy.

All failures raised by the reader derive from LineStreamError. Each concrete
error also inherits from the closest builtin so callers can catch either.
"""

from typing import Optional


class LineStreamError(Exception):
    """Base class for every error raised by linestream."""


class EndOfStream(LineStreamError, EOFError):
    """
    No further line or record is available.

    Raised by single-item pulls (next, peek, next_record). Bulk traversals
    absorb it and flip their exhausted/done flag instead. It is intentionally
    not a StopIteration so it survives being raised inside a generator.
    """


class RewindRangeError(LineStreamError, IndexError):
    """
    A backward skip asked for more lines than the history buffer holds.

    Attributes:
        requested: Number of lines the caller tried to rewind.
        available: Number of lines held in the history buffer at the time.
    """

    def __init__(self, requested: int, available: int) -> None:
        self.requested = requested
        self.available = available
        super().__init__(
            f"Cannot rewind {requested} line(s): only {available} held in history."
        )


class BoundaryPatternError(LineStreamError, ValueError):
    """A boundary detector could not find its expected pattern in a line."""

    def __init__(self, message: str, line: Optional[str] = None) -> None:
        self.line = line
        super().__init__(message)


class InputOpenError(LineStreamError, OSError):
    """The given input cannot be turned into a line source."""
