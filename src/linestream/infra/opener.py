from __future__ import annotations

"""
Input Opening Layer.

Turns whatever the caller hands over (a filesystem path, a text or binary
stream, an in-memory iterable of strings) into an iterable of text lines.
Handles transparent gzip decompression. The core never sees paths, bytes or
encodings; it only receives the stream produced here.
"""

import gzip as gzip_module
import io
import logging
import os
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from linestream.domain.constants import (
    DEFAULT_ENCODING,
    DEFAULT_ENCODING_ERRORS,
    GZIP_SUFFIXES,
)
from linestream.domain.errors import InputOpenError

logger = logging.getLogger(__name__)


@dataclass
class OpenedInput:
    """
    Result of opening an input.

    Attributes:
        stream: Iterable of text lines ready for a LineSource.
        owned: True when the handle was created here and must be closed by
            whoever holds this object.
        name: Human-readable label (path or stream name).
    """
    stream: Iterable[str]
    owned: bool
    name: str

    def close(self) -> None:
        """Close the stream if it was opened here."""
        if self.owned and hasattr(self.stream, "close"):
            self.stream.close()  # type: ignore[attr-defined]
            self.owned = False


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def is_gzip_path(path: Any) -> bool:
    """Check whether a path name carries a gzip suffix."""
    return os.fspath(path).lower().endswith(GZIP_SUFFIXES)


def open_input(
        source: Any,
        *,
        gzip: Optional[bool] = None,
        encoding: str = DEFAULT_ENCODING,
        errors: str = DEFAULT_ENCODING_ERRORS,
) -> OpenedInput:
    """
    Open a path, stream or iterable as a sequence of text lines.

    Args:
        source: Path (str or os.PathLike), text stream, binary stream, or any
            iterable of str.
        gzip: Force (True) or disable (False) decompression. None detects it
            from a .gz suffix for paths and never assumes it for streams.
        encoding: Text encoding used when decoding bytes.
        errors: Decoding error policy passed to the text layer.

    Returns:
        OpenedInput: The text stream plus ownership information.

    Raises:
        OSError: The path cannot be opened.
        InputOpenError: The input type cannot be read as text lines.
    """
    if isinstance(source, (str, os.PathLike)):
        return _open_path(source, gzip=gzip, encoding=encoding, errors=errors)

    if isinstance(source, (bytes, bytearray)):
        raise InputOpenError("Raw bytes are not a line source; wrap them in io.BytesIO.")

    name = _stream_name(source)

    if isinstance(source, io.TextIOBase):
        if gzip:
            binary = getattr(source, "buffer", None)
            if binary is None:
                raise InputOpenError(f"Cannot decompress text-only stream {name}.")
            return _wrap_binary(binary, gzip=True, encoding=encoding, errors=errors, name=name)
        return OpenedInput(stream=source, owned=False, name=name)

    if _is_binary_stream(source):
        return _wrap_binary(source, gzip=bool(gzip), encoding=encoding, errors=errors, name=name)

    if gzip:
        raise InputOpenError(f"gzip=True requires a path or a binary stream, got {type(source).__name__}.")

    try:
        iter(source)
    except TypeError:
        raise InputOpenError(f"Unsupported input type: {type(source).__name__}.") from None
    return OpenedInput(stream=source, owned=False, name=name)


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _open_path(path: Any, *, gzip: Optional[bool], encoding: str, errors: str) -> OpenedInput:
    """Open a filesystem path, decompressing when requested or detected."""
    name = os.fspath(path)
    if isinstance(name, bytes):
        name = os.fsdecode(name)

    use_gzip = is_gzip_path(name) if gzip is None else gzip
    if use_gzip:
        logger.debug(f"Opening {name} with gzip decompression.")
        stream = gzip_module.open(name, "rt", encoding=encoding, errors=errors)
    else:
        logger.debug(f"Opening {name} as plain text.")
        stream = open(name, "r", encoding=encoding, errors=errors)
    return OpenedInput(stream=stream, owned=True, name=name)


def _wrap_binary(binary: Any, *, gzip: bool, encoding: str, errors: str, name: str) -> OpenedInput:
    """
    Layer decompression and decoding over a caller-owned binary stream.

    The wrappers are owned by us, but closing them would close the caller's
    handle too, so they are detached from it instead.
    """
    raw = gzip_module.GzipFile(fileobj=binary, mode="rb") if gzip else binary
    text = io.TextIOWrapper(raw, encoding=encoding, errors=errors)
    return OpenedInput(stream=_DetachingReader(text, raw if gzip else None), owned=True, name=name)


class _DetachingReader:
    """Iterates a TextIOWrapper and releases it without closing the wrapped handle."""

    def __init__(self, text: io.TextIOWrapper, gzip_file: Optional[gzip_module.GzipFile]) -> None:
        self._text = text
        self._gzip_file = gzip_file
        self.name = getattr(text, "name", None)

    def __iter__(self):
        return iter(self._text)

    def close(self) -> None:
        try:
            self._text.detach()
        except ValueError:
            # Already detached or closed
            pass
        if self._gzip_file is not None:
            # GzipFile.close() leaves a caller-supplied fileobj open
            self._gzip_file.close()


def _is_binary_stream(source: Any) -> bool:
    if isinstance(source, (io.RawIOBase, io.BufferedIOBase)):
        return True
    mode = getattr(source, "mode", None)
    return isinstance(mode, str) and "b" in mode and hasattr(source, "read")


def _stream_name(source: Any) -> str:
    name = getattr(source, "name", None)
    if isinstance(name, str):
        return name
    return f"<{type(source).__name__}>"
