from __future__ import annotations

"""
linestream: rewindable, line-numbered, record-aware text stream reading.
"""

from linestream.core.boundaries import (
    BoundaryDetector,
    FunctionBoundary,
    PatternBoundary,
    PrefixChangeBoundary,
)
from linestream.core.cursor import LineCursor
from linestream.core.records import RecordAssembler
from linestream.core.source import LineEntry, LineSource
from linestream.domain.config import ReaderOptions, validate_options
from linestream.domain.errors import (
    BoundaryPatternError,
    EndOfStream,
    InputOpenError,
    LineStreamError,
    RewindRangeError,
)
from linestream.iterator import LineIterator

__version__ = "0.1.0"

__all__ = [
    "LineIterator",
    "LineCursor",
    "LineSource",
    "LineEntry",
    "RecordAssembler",
    "BoundaryDetector",
    "PatternBoundary",
    "PrefixChangeBoundary",
    "FunctionBoundary",
    "ReaderOptions",
    "validate_options",
    "LineStreamError",
    "EndOfStream",
    "RewindRangeError",
    "BoundaryPatternError",
    "InputOpenError",
]
