from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

1. Makes the 'src' directory importable without installation.
2. Provides paths to the bundled text fixtures and gzip copies of them.
"""

import gzip
import os
import shutil
import sys
from pathlib import Path
from typing import Callable

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

DATA_DIR = Path(__file__).resolve().parent / "data"


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def test_data() -> Callable[[str], str]:
    """Resolve a file name inside tests/data to an absolute path string."""
    def _resolve(name: str) -> str:
        return str(DATA_DIR / name)
    return _resolve


@pytest.fixture
def numbers_path(test_data: Callable[[str], str]) -> str:
    return test_data("numbers.txt")


@pytest.fixture
def numbers_gz(tmp_path: Path, numbers_path: str) -> Path:
    """Gzip-compressed copy of numbers.txt."""
    target = tmp_path / "numbers.txt.gz"
    with open(numbers_path, "rb") as src, gzip.open(target, "wb") as dst:
        shutil.copyfileobj(src, dst)
    return target
