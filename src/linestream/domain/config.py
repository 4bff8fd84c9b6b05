from __future__ import annotations

"""
Reader Options Domain.

Defines the options accepted when building a LineIterator, plus the
validation gate that turns untrusted dictionaries (JSON files, CLI
overrides) into a typed ReaderOptions instance.
"""

import json
import logging
import re
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, List, Optional, Tuple

from linestream.domain.constants import (
    DEFAULT_BUFFER_SIZE,
    DEFAULT_ENCODING,
    DEFAULT_ENCODING_ERRORS,
    DEFAULT_END_OF_RECORD_PATTERN,
)

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# OPTIONS MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ReaderOptions:
    """
    Immutable set of options for opening and reading an input.

    Attributes:
        gzip: Force (True) or disable (False) gzip decompression. None means
            "detect from the file name".
        buffer_size: Capacity of the rewind history.
        encoding: Text encoding used when decoding bytes.
        errors: Decoding error policy ('strict', 'replace', ...).
        end_of_record_pattern: Regex matching a record delimiter line.
    """
    gzip: Optional[bool] = None
    buffer_size: int = DEFAULT_BUFFER_SIZE
    encoding: str = DEFAULT_ENCODING
    errors: str = DEFAULT_ENCODING_ERRORS
    end_of_record_pattern: str = DEFAULT_END_OF_RECORD_PATTERN


OPTION_KEYS = tuple(f.name for f in fields(ReaderOptions))


def get_default_options() -> Dict[str, Any]:
    """Default options as a plain dictionary."""
    return asdict(ReaderOptions())


def options_to_dict(options: ReaderOptions) -> Dict[str, Any]:
    """JSON-ready representation of an options instance."""
    return asdict(options)


# -----------------------------------------------------------------------------
# VALIDATION
# -----------------------------------------------------------------------------

def validate_options(
        raw: Any,
        *,
        strict: bool = False,
) -> Tuple[ReaderOptions, List[str]]:
    """
    Validate and normalize a raw options mapping.

    Missing keys take their defaults and unknown keys are dropped. In lenient
    mode invalid values are replaced by defaults and reported as warnings.

    Args:
        raw: Options mapping (usually parsed JSON or CLI overrides).
        strict: Raise instead of falling back to defaults.

    Returns:
        Tuple[ReaderOptions, List[str]]: Normalized options and warnings.

    Raises:
        TypeError: strict mode and a value of the wrong type.
        ValueError: strict mode and an out-of-range value or bad pattern.
    """
    warnings: List[str] = []
    defaults = get_default_options()

    if raw is None:
        return ReaderOptions(), warnings

    if not isinstance(raw, dict):
        msg = f"Invalid options type: expected dict, received {type(raw).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        return ReaderOptions(), warnings

    for key in raw:
        if key not in OPTION_KEYS:
            msg = f"Unknown option '{key}'."
            if strict:
                raise ValueError(msg)
            warnings.append(f"{msg} Ignored.")

    merged: Dict[str, Any] = dict(defaults)
    merged.update({k: v for k, v in raw.items() if k in OPTION_KEYS and v is not None})

    merged["gzip"] = _as_optional_bool(merged["gzip"], "gzip", warnings, strict)
    merged["buffer_size"] = _as_positive_int(
        merged["buffer_size"], defaults["buffer_size"], "buffer_size", warnings, strict
    )
    for key in ("encoding", "errors"):
        merged[key] = _as_str(merged[key], defaults[key], key, warnings, strict)
    merged["end_of_record_pattern"] = _as_pattern(
        merged["end_of_record_pattern"], defaults["end_of_record_pattern"], warnings, strict
    )

    return ReaderOptions(**merged), warnings


# -----------------------------------------------------------------------------
# PERSISTENCE
# -----------------------------------------------------------------------------

def load_options(path: str) -> Dict[str, Any]:
    """
    Read a JSON options file.

    A missing, unreadable or malformed file yields an empty mapping so the
    caller falls back to defaults.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.warning(f"Options file not found: {path}")
        return {}
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to read options file {path}: {e}")
        return {}

    if not isinstance(data, dict):
        logger.warning(f"Options file {path} does not hold a JSON object. Ignored.")
        return {}
    return data


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_optional_bool(value: Any, field: str, warnings: List[str], strict: bool) -> Optional[bool]:
    """Coerce to bool, keeping None as 'not specified'."""
    if value is None or isinstance(value, bool):
        return value

    if not strict:
        if isinstance(value, int) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False
            if s in ("", "auto"):
                return None

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using auto-detection.")
    return None


def _as_positive_int(value: Any, fallback: int, field: str, warnings: List[str], strict: bool) -> int:
    """Coerce to an integer greater than zero."""
    if isinstance(value, bool):
        number = None
    elif isinstance(value, int):
        number = value
    elif isinstance(value, str) and not strict:
        try:
            number = int(value.strip())
        except ValueError:
            number = None
    else:
        number = None

    if number is None:
        msg = f"Invalid field '{field}': expected int, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    if number < 1:
        msg = f"Invalid field '{field}': must be positive, received {number}."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback
    return number


def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate non-empty string inputs."""
    if isinstance(value, str) and value.strip():
        return value.strip()

    msg = f"Invalid field '{field}': expected non-empty str, received {value!r}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_pattern(value: Any, fallback: str, warnings: List[str], strict: bool) -> str:
    """Ensure the delimiter pattern is a compilable regular expression."""
    if not isinstance(value, str):
        msg = f"Invalid field 'end_of_record_pattern': expected str, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback
    try:
        re.compile(value)
    except re.error as e:
        msg = f"Invalid field 'end_of_record_pattern': {e}."
        if strict:
            raise ValueError(msg) from e
        warnings.append(f"{msg} Using fallback.")
        return fallback
    return value
