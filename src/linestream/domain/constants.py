from __future__ import annotations

"""
Domain Constants.

Central defaults shared by the cursor, the record assembler and the
options layer.
"""

# Number of consumed lines kept for backward skips
DEFAULT_BUFFER_SIZE: int = 100

# A blank or whitespace-only line ends a record
DEFAULT_END_OF_RECORD_PATTERN: str = r"^\s*$"

# Leading integer followed by whitespace, e.g. "12 some text"
DEFAULT_PREFIX_PATTERN: str = r"^(\d+)\s+"

DEFAULT_ENCODING: str = "utf-8"
DEFAULT_ENCODING_ERRORS: str = "strict"

GZIP_SUFFIXES = (".gz", ".gzip")
