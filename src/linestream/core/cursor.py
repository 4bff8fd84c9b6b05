from __future__ import annotations

"""
Line Cursor Engine.

Forward iteration over a LineSource with 1-based line numbers and a bounded
rewind. Consumed lines are kept in a fixed-size ring buffer (history); a
backward skip moves the newest history entries into a replay queue which is
drained before any fresh line is pulled from the source.
"""

import logging
from collections import deque
from typing import Deque, Iterator, Tuple

from linestream.core.source import LineEntry, LineSource
from linestream.domain.constants import DEFAULT_BUFFER_SIZE
from linestream.domain.errors import EndOfStream, RewindRangeError

logger = logging.getLogger(__name__)


def chomp(text: str) -> str:
    """Remove a single trailing line terminator (\\r\\n, \\n or \\r)."""
    if text.endswith("\r\n"):
        return text[:-2]
    if text.endswith(("\n", "\r")):
        return text[:-1]
    return text


class LineCursor:
    """
    Rewindable, line-numbered cursor over a raw line source.

    Attributes:
        last_line_number: Number of the line most recently returned by next()
            (0 before the first line, and after rewinding to the beginning).
        exhausted: True once next() hit the end of the stream with nothing
            left to replay.
    """

    def __init__(self, source: LineSource, buffer_size: int = DEFAULT_BUFFER_SIZE) -> None:
        if isinstance(buffer_size, bool) or not isinstance(buffer_size, int) or buffer_size < 1:
            raise ValueError(f"buffer_size must be a positive integer, got {buffer_size!r}")

        self.source = source
        self.buffer_size = buffer_size
        self._history: Deque[LineEntry] = deque(maxlen=buffer_size)
        self._pending: Deque[LineEntry] = deque()
        self.last_line_number = 0
        self.exhausted = False

    # -------------------------------------------------------------------------
    # INTROSPECTION
    # -------------------------------------------------------------------------

    @property
    def history_size(self) -> int:
        """Number of lines that can currently be rewound."""
        return len(self._history)

    @property
    def pending_size(self) -> int:
        """Number of lines queued for replay before the source is read again."""
        return len(self._pending)

    # -------------------------------------------------------------------------
    # SINGLE-LINE OPERATIONS
    # -------------------------------------------------------------------------

    def next(self) -> str:
        """
        Consume and return the next line without its line terminator.

        Replayed lines take precedence over fresh ones from the source.

        Returns:
            str: The line content.

        Raises:
            EndOfStream: Nothing left to replay and the source is exhausted.
        """
        if self._pending:
            entry = self._pending.popleft()
        else:
            try:
                entry = self._pull()
            except EndOfStream:
                self.exhausted = True
                raise

        self._history.append(entry)
        self.last_line_number = entry.number
        return entry.text

    def peek(self) -> str:
        """
        Return the line next() would produce, without consuming it.

        Raises:
            EndOfStream: Same condition as next(); line number and exhausted
                flag are left untouched.
        """
        if not self._pending:
            # Parked in the replay queue so next() picks it up in order
            self._pending.append(self._pull())
        return self._pending[0].text

    def _pull(self) -> LineEntry:
        raw = self.source.read()
        return LineEntry(text=chomp(raw.text), number=raw.number)

    # -------------------------------------------------------------------------
    # SKIPPING
    # -------------------------------------------------------------------------

    def skip(self, n: int = 1) -> None:
        """
        Move n lines forward (n > 0) or backward (n < 0).

        Raises:
            RewindRangeError: Backward skip beyond the history buffer.
        """
        if n > 0:
            self.skip_forward(n)
        elif n < 0:
            self.skip_backward(-n)

    def skip_forward(self, n: int = 1) -> None:
        """Consume n lines, stopping quietly if the stream ends first."""
        if n < 0:
            raise ValueError(f"skip_forward expects a non-negative count, got {n}")
        try:
            for _ in range(n):
                self.next()
        except EndOfStream:
            self.exhausted = True

    def skip_backward(self, n: int = 1) -> None:
        """
        Rewind n lines so the next n calls to next() replay them.

        Afterwards last_line_number names the line just before the replay
        point, i.e. the most recently returned line from the caller's view.

        Raises:
            ValueError: n is negative.
            RewindRangeError: n exceeds the lines held in history. Nothing
                is modified in that case.
        """
        if n < 0:
            raise ValueError(f"skip_backward expects a non-negative count, got {n}")
        if n > len(self._history):
            raise RewindRangeError(requested=n, available=len(self._history))
        if n == 0:
            return

        for _ in range(n):
            self._pending.appendleft(self._history.pop())

        self.last_line_number = self._pending[0].number - 1
        self.exhausted = False
        logger.debug(f"Rewound {n} line(s); replay starts at line {self._pending[0].number}.")

    # -------------------------------------------------------------------------
    # BULK TRAVERSAL
    # -------------------------------------------------------------------------

    def each(self) -> Iterator[str]:
        """Yield the remaining lines; ends cleanly at the end of the stream."""
        while True:
            try:
                line = self.next()
            except EndOfStream:
                self.exhausted = True
                return
            yield line

    def each_with_index(self) -> Iterator[Tuple[str, int]]:
        """Yield (line, line_number) pairs for the remaining lines."""
        for line in self.each():
            yield line, self.last_line_number

    def __iter__(self) -> Iterator[str]:
        return self.each()

    def __next__(self) -> str:
        try:
            return self.next()
        except EndOfStream:
            raise StopIteration from None

    def __repr__(self) -> str:
        return f"{type(self).__name__} <{self.source.name}, last_line_number: {self.last_line_number}>"
