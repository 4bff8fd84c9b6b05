from __future__ import annotations

"""
LineIterator Facade.

One object wiring an opened input to a LineCursor and a RecordAssembler.
This is the entry point most callers need:

    with LineIterator("data.txt.gz") as it:
        it.skip(5)
        for record in it.each_record():
            ...
"""

import logging
from typing import Any, Iterator, List, Optional, Tuple, Union

from linestream.core.boundaries import BoundaryDetector, BoundaryFunc, PatternLike
from linestream.core.cursor import LineCursor
from linestream.core.records import RecordAssembler
from linestream.core.source import LineSource
from linestream.domain.config import ReaderOptions, options_to_dict, validate_options
from linestream.infra.opener import OpenedInput, open_input

logger = logging.getLogger(__name__)


class LineIterator:
    """
    Rewindable, record-aware line iterator over a path, stream or iterable.

    Args:
        input: File path, open text/binary stream, or iterable of str.
        options: Reader options; keyword overrides are applied on top.
        boundary: Record boundary detector (or callable) replacing the
            pattern-based default.
        **overrides: Individual ReaderOptions fields (gzip, buffer_size, ...).

    Raises:
        OSError: A path cannot be opened.
        InputOpenError: The input cannot be read as text lines.
        TypeError, ValueError: Invalid option overrides.
    """

    def __init__(
            self,
            input: Any,
            options: Optional[ReaderOptions] = None,
            *,
            boundary: Union[BoundaryDetector, BoundaryFunc, None] = None,
            **overrides: Any,
    ) -> None:
        options = options or ReaderOptions()
        # Validated before the input is opened
        options, _ = validate_options({**options_to_dict(options), **overrides}, strict=True)
        self.options = options

        self._input: OpenedInput = open_input(
            input,
            gzip=options.gzip,
            encoding=options.encoding,
            errors=options.errors,
        )
        self.name = self._input.name

        try:
            self.cursor = LineCursor(LineSource(self._input.stream, name=self.name), options.buffer_size)
            self.records = RecordAssembler(
                self.cursor,
                boundary=boundary,
                end_of_record_pattern=options.end_of_record_pattern,
            )
        except BaseException:
            self._input.close()
            raise
        logger.debug(f"Opened {self!r} (buffer_size={options.buffer_size}).")

    # -------------------------------------------------------------------------
    # STATE
    # -------------------------------------------------------------------------

    @property
    def last_line_number(self) -> int:
        return self.cursor.last_line_number

    @property
    def last_record_number(self) -> int:
        return self.records.last_record_number

    @property
    def done(self) -> bool:
        """
        True once the stream has been read to the end.

        A successful rewind makes replayable lines available again, so it
        clears this flag for both lines and records.
        """
        return self.cursor.exhausted or self.records.done

    @property
    def end_of_record_pattern(self) -> Optional[str]:
        return self.records.end_of_record_pattern

    @end_of_record_pattern.setter
    def end_of_record_pattern(self, pattern: PatternLike) -> None:
        self.records.end_of_record_pattern = pattern

    @property
    def boundary(self) -> BoundaryDetector:
        return self.records.boundary

    @boundary.setter
    def boundary(self, value: Union[BoundaryDetector, BoundaryFunc, None]) -> None:
        self.records.boundary = value

    # -------------------------------------------------------------------------
    # LINES
    # -------------------------------------------------------------------------

    def next(self) -> str:
        return self.cursor.next()

    def peek(self) -> str:
        return self.cursor.peek()

    def skip(self, n: int = 1) -> None:
        self.cursor.skip(n)
        if n < 0:
            self._resume_records()

    def skip_forward(self, n: int = 1) -> None:
        self.cursor.skip_forward(n)

    def skip_backward(self, n: int = 1) -> None:
        self.cursor.skip_backward(n)
        self._resume_records()

    def _resume_records(self) -> None:
        if self.cursor.pending_size:
            self.records.done = False

    def each(self) -> Iterator[str]:
        return self.cursor.each()

    def each_with_index(self) -> Iterator[Tuple[str, int]]:
        return self.cursor.each_with_index()

    def __iter__(self) -> Iterator[str]:
        return self.cursor.each()

    def __next__(self) -> str:
        return next(self.cursor)

    # -------------------------------------------------------------------------
    # RECORDS
    # -------------------------------------------------------------------------

    def next_record(self) -> List[str]:
        return self.records.next_record()

    def each_record(self) -> Iterator[List[str]]:
        return self.records.each_record()

    def skip_records(self, n: int = 1) -> None:
        self.records.skip_records(n)

    # -------------------------------------------------------------------------
    # LIFECYCLE
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """Close the underlying handle if this iterator opened it."""
        self._input.close()

    def __enter__(self) -> LineIterator:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__} <{self.name}, last_line_number: {self.last_line_number}>"

    __str__ = __repr__
