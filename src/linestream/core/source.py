from __future__ import annotations

"""
Raw Line Source.

Adapts any iterable of text lines (open file, StringIO, list, decompressed
stream) into a numbered producer. Lines are handed out untouched; newline
handling belongs to the cursor.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from linestream.domain.errors import EndOfStream

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class LineEntry:
    """
    A line together with its original position in the stream.

    Attributes:
        text: Line content (raw from the source, stripped once in the cursor).
        number: 1-based position of the line in the underlying stream.
    """
    text: str
    number: int


# -----------------------------------------------------------------------------
# SOURCE ADAPTER
# -----------------------------------------------------------------------------

class LineSource:
    """
    Numbered, forward-only producer of raw lines.

    Attributes:
        position: Number of the most recently produced raw line (0 before any).
        exhausted: True once the wrapped iterable reported end of data.
    """

    def __init__(self, lines: Iterable[str], name: Optional[str] = None) -> None:
        self._iter: Iterator[str] = iter(lines)
        self.name = name or _describe(lines)
        self.position = 0
        self.exhausted = False

    def read(self) -> LineEntry:
        """
        Produce the next raw line.

        Raises:
            EndOfStream: The wrapped iterable has no more lines.
        """
        if self.exhausted:
            raise EndOfStream(f"Source {self.name} is exhausted.")
        try:
            text = next(self._iter)
        except StopIteration:
            self.exhausted = True
            logger.debug(f"Source {self.name} exhausted after {self.position} line(s).")
            raise EndOfStream(f"Source {self.name} is exhausted.") from None

        self.position += 1
        return LineEntry(text=text, number=self.position)

    def __repr__(self) -> str:
        return f"LineSource <{self.name}, position: {self.position}>"


def _describe(lines: Iterable[str]) -> str:
    """Best-effort human label for a wrapped iterable."""
    name = getattr(lines, "name", None)
    if isinstance(name, str):
        return name
    return f"<{type(lines).__name__}>"
