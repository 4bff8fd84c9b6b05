from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Runs 'python -m linestream' in a subprocess to validate exit codes and the
stdout/stderr contract.
"""

import os
import subprocess
import sys
from pathlib import Path
from typing import List

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"


def run_cli(args: List[str], stdin: str | None = None) -> subprocess.CompletedProcess[str]:
    """Execute the CLI with 'src' on PYTHONPATH so no install is needed."""
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")

    return subprocess.run(
        [sys.executable, "-m", "linestream"] + args,
        env=env,
        input=stdin,
        capture_output=True,
        text=True,
        encoding="utf-8",
    )


def test_cli_counts_poetry_records(test_data) -> None:
    result = run_cli([test_data("poetry.txt"), "--records", "--json"])
    assert result.returncode == 0, result.stderr
    assert len(result.stdout.splitlines()) == 5


def test_cli_reads_stdin() -> None:
    result = run_cli(["-", "-n"], stdin="alpha\nbeta\n")
    assert result.returncode == 0
    assert result.stdout.splitlines() == ["     1  alpha", "     2  beta"]


def test_cli_missing_file() -> None:
    result = run_cli(["/non/existent/path.txt"])
    assert result.returncode == 2
    assert "does not exist" in result.stderr


def test_cli_debug_logs_to_stderr(test_data) -> None:
    result = run_cli([test_data("numbers.txt"), "--debug", "--limit", "1"])
    assert result.returncode == 0
    assert result.stdout == "One\n"
    assert "DEBUG" in result.stderr
