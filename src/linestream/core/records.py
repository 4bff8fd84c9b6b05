from __future__ import annotations

"""
Record Assembler.

Groups consecutive lines from a LineCursor into records. Where one record
ends and the next begins is decided by a pluggable BoundaryDetector; the
assembler itself only ever talks to the cursor through next() and peek().
"""

import logging
from typing import Iterator, List, Optional, Sequence, Union

from linestream.core.boundaries import (
    BoundaryDetector,
    BoundaryFunc,
    PatternBoundary,
    PatternLike,
    as_boundary,
)
from linestream.core.cursor import LineCursor
from linestream.domain.constants import DEFAULT_END_OF_RECORD_PATTERN
from linestream.domain.errors import EndOfStream

logger = logging.getLogger(__name__)


class RecordAssembler:
    """
    Turns a line cursor into a stream of records (lists of lines).

    Attributes:
        cursor: The cursor supplying lines.
        last_record_number: Number of records returned so far.
        done: True once the cursor ran dry; no further record will follow.
    """

    def __init__(
            self,
            cursor: LineCursor,
            boundary: Union[BoundaryDetector, BoundaryFunc, None] = None,
            end_of_record_pattern: PatternLike = DEFAULT_END_OF_RECORD_PATTERN,
    ) -> None:
        self.cursor = cursor
        self._boundary: BoundaryDetector = self._install(
            as_boundary(boundary) if boundary is not None else PatternBoundary(end_of_record_pattern)
        )
        self.last_record_number = 0
        self.done = False

    # -------------------------------------------------------------------------
    # BOUNDARY CONFIGURATION
    # -------------------------------------------------------------------------

    @property
    def boundary(self) -> BoundaryDetector:
        return self._boundary

    @boundary.setter
    def boundary(self, value: Union[BoundaryDetector, BoundaryFunc, None]) -> None:
        self._boundary = self._install(as_boundary(value))

    @property
    def end_of_record_pattern(self) -> Optional[str]:
        """Pattern of the installed delimiter policy, None for other policies."""
        if isinstance(self._boundary, PatternBoundary):
            return self._boundary.pattern.pattern
        return None

    @end_of_record_pattern.setter
    def end_of_record_pattern(self, pattern: PatternLike) -> None:
        self._boundary = self._install(PatternBoundary(pattern))

    @staticmethod
    def _install(detector: BoundaryDetector) -> BoundaryDetector:
        # Installed detectors start without state from an earlier stream
        detector.reset()
        return detector

    def is_at_boundary(self, buffer: Sequence[str]) -> bool:
        """Ask the installed detector whether the current record ends here."""
        return self._boundary.is_boundary(self.cursor, buffer)

    # -------------------------------------------------------------------------
    # RECORD OPERATIONS
    # -------------------------------------------------------------------------

    def next_record(self) -> List[str]:
        """
        Consume and return the next record.

        Consecutive boundaries never produce an empty record. When the stream
        ends mid-record the partial record is returned as the last one.

        Returns:
            List[str]: Lines of the record, in stream order.

        Raises:
            EndOfStream: The assembler is done, or the stream ended before
                any line of a new record was read.
        """
        if self.done:
            raise EndOfStream("No more records.")

        buffer: List[str] = []
        try:
            while True:
                if self.is_at_boundary(buffer):
                    if buffer:
                        return self._emit(buffer)
                else:
                    buffer.append(self.cursor.next())
        except EndOfStream:
            self.done = True
            logger.debug(f"Stream exhausted at line {self.cursor.last_line_number}.")
            if not buffer:
                raise
            return self._emit(buffer)

    def _emit(self, buffer: List[str]) -> List[str]:
        self.last_record_number += 1
        logger.debug(
            f"Record {self.last_record_number}: {len(buffer)} line(s) "
            f"ending at line {self.cursor.last_line_number}."
        )
        return buffer

    def each_record(self) -> Iterator[List[str]]:
        """Yield the remaining records; ends cleanly at the end of the stream."""
        while not self.done:
            try:
                record = self.next_record()
            except EndOfStream:
                return
            yield record

    def skip_records(self, n: int = 1) -> None:
        """Discard n records, stopping quietly if the stream ends first."""
        if n < 0:
            raise ValueError(f"skip_records expects a non-negative count, got {n}")
        try:
            for _ in range(n):
                self.next_record()
        except EndOfStream:
            self.done = True

    def __iter__(self) -> Iterator[List[str]]:
        return self.each_record()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__} <{self.cursor.source.name}, "
            f"last_record_number: {self.last_record_number}, boundary: {self._boundary!r}>"
        )
