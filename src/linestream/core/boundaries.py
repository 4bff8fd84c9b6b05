from __future__ import annotations

"""
Record Boundary Strategies.

A boundary detector answers one question for the record assembler: "is the
cursor positioned at the end of the current record?". Detectors look ahead
through cursor.peek() and consume delimiter lines through cursor.next() when
their policy eats them. Errors they raise are never reinterpreted.
"""

import re
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, Optional, Sequence, Union

from linestream.domain.constants import DEFAULT_END_OF_RECORD_PATTERN, DEFAULT_PREFIX_PATTERN
from linestream.domain.errors import BoundaryPatternError

if TYPE_CHECKING:
    from linestream.core.cursor import LineCursor

PatternLike = Union[str, re.Pattern[str]]
BoundaryFunc = Callable[["LineCursor", Sequence[str]], bool]


def compile_pattern(pattern: PatternLike) -> re.Pattern[str]:
    """Accept a regex string or an already compiled pattern."""
    if isinstance(pattern, str):
        return re.compile(pattern)
    return pattern


class BoundaryDetector(ABC):
    """
    Abstract strategy deciding where records end.
    """

    @abstractmethod
    def is_boundary(self, cursor: LineCursor, buffer: Sequence[str]) -> bool:
        """
        Decide whether a record boundary lies at the cursor position.

        Args:
            cursor: Cursor to peek at (and consume delimiters from).
            buffer: Lines accumulated so far for the current record.

        Returns:
            bool: True if the current record ends here.

        Raises:
            EndOfStream: Propagated from cursor.peek() at end of data.
        """
        pass

    def reset(self) -> None:
        """Forget any per-stream state. Stateless detectors ignore this."""


class PatternBoundary(BoundaryDetector):
    """
    Delimiter-line policy: a line matching the pattern ends the record and is
    consumed, so it never appears in any record.
    """

    def __init__(self, pattern: PatternLike = DEFAULT_END_OF_RECORD_PATTERN) -> None:
        self.pattern = compile_pattern(pattern)

    def is_boundary(self, cursor: LineCursor, buffer: Sequence[str]) -> bool:
        if self.pattern.search(cursor.peek()):
            cursor.next()
            return True
        return False

    def __repr__(self) -> str:
        return f"PatternBoundary({self.pattern.pattern!r})"


class PrefixChangeBoundary(BoundaryDetector):
    """
    Key-change policy: every line carries a key (captured by the pattern) and
    a record is a run of consecutive lines sharing the same key. The line
    introducing a new key is left in the stream; it opens the next record.
    """

    def __init__(self, pattern: PatternLike = DEFAULT_PREFIX_PATTERN, group: Union[int, str] = 1) -> None:
        self.pattern = compile_pattern(pattern)
        self.group = group
        self._previous: Optional[str] = None

    def prefix(self, line: str) -> str:
        """
        Extract the record key from a line.

        Raises:
            BoundaryPatternError: The line does not carry a key.
        """
        match = self.pattern.search(line)
        if match is None:
            raise BoundaryPatternError(
                f"Line does not match prefix pattern {self.pattern.pattern!r}: {line!r}",
                line=line,
            )
        return match.group(self.group)

    def is_boundary(self, cursor: LineCursor, buffer: Sequence[str]) -> bool:
        current = self.prefix(cursor.peek())
        if current == self._previous:
            return False
        self._previous = current
        return bool(buffer)

    def reset(self) -> None:
        self._previous = None

    def __repr__(self) -> str:
        return f"PrefixChangeBoundary({self.pattern.pattern!r}, group={self.group!r})"


class FunctionBoundary(BoundaryDetector):
    """Adapter turning a plain callable (cursor, buffer) -> bool into a detector."""

    def __init__(self, func: BoundaryFunc) -> None:
        self.func = func

    def is_boundary(self, cursor: LineCursor, buffer: Sequence[str]) -> bool:
        return bool(self.func(cursor, buffer))

    def __repr__(self) -> str:
        name = getattr(self.func, "__name__", type(self.func).__name__)
        return f"FunctionBoundary({name})"


def as_boundary(boundary: Union[BoundaryDetector, BoundaryFunc, None]) -> BoundaryDetector:
    """
    Normalize user input into a BoundaryDetector.

    None selects the default blank-line policy.

    Raises:
        TypeError: The value is neither a detector nor callable.
    """
    if boundary is None:
        return PatternBoundary()
    if isinstance(boundary, BoundaryDetector):
        return boundary
    if callable(boundary):
        return FunctionBoundary(boundary)
    raise TypeError(f"Expected a BoundaryDetector or callable, got {type(boundary).__name__}")
