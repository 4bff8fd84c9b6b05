from __future__ import annotations

"""
Integration tests for the logging bootstrap.

Verifies the QueueListener architecture, idempotent configuration, log
file rotation and that library modules reach the configured handlers.
"""

import logging
from pathlib import Path

import pytest

from linestream import LineIterator
from linestream.infra.logging import (
    _CONFIGURED_FLAG_ATTR,
    _HANDLER_TAG_ATTR,
    _QUEUE_LISTENER_ATTR,
    LoggingConfig,
    configure_logging,
    shutdown_logging,
)


@pytest.fixture(autouse=True)
def reset_logging():
    """Leave the root logger as we found it."""
    root = logging.getLogger()
    previous_level = root.level
    shutdown_logging()
    yield
    shutdown_logging()
    root.setLevel(previous_level)


def _our_handlers() -> list:
    return [h for h in logging.getLogger().handlers if getattr(h, _HANDLER_TAG_ATTR, False)]


def test_logging_idempotency() -> None:
    cfg = LoggingConfig(level="INFO", console=True)
    configure_logging(cfg)
    count = len(_our_handlers())
    configure_logging(cfg)
    assert len(_our_handlers()) == count == 1


def test_force_reconfigures() -> None:
    configure_logging(LoggingConfig(level="INFO"))
    first = getattr(logging.getLogger(), _QUEUE_LISTENER_ATTR)
    configure_logging(LoggingConfig(level="DEBUG"), force=True)
    root = logging.getLogger()
    assert getattr(root, _QUEUE_LISTENER_ATTR) is not first
    assert root.level == logging.DEBUG
    assert len(_our_handlers()) == 1


def test_unknown_level_falls_back_to_warning() -> None:
    configure_logging(LoggingConfig(level="chatty"))
    assert logging.getLogger().level == logging.WARNING


def test_no_outputs_attaches_nothing() -> None:
    configure_logging(LoggingConfig(console=False, log_file=None))
    assert _our_handlers() == []


def test_log_rotation(tmp_path: Path) -> None:
    log_file = tmp_path / "rotate.log"
    configure_logging(LoggingConfig(level="DEBUG", console=False, log_file=str(log_file),
                                    max_bytes=100, backup_count=1))
    logger = logging.getLogger("test_rotate")
    for _ in range(10):
        logger.debug("A long message that fills the rotating log quickly." * 3)

    shutdown_logging()

    assert log_file.exists()
    assert (tmp_path / "rotate.log.1").exists()


def test_library_debug_records_reach_file(tmp_path: Path, numbers_path: str) -> None:
    log_file = tmp_path / "reader.log"
    configure_logging(LoggingConfig(level="DEBUG", console=False, log_file=str(log_file)))

    with LineIterator(numbers_path) as it:
        it.skip(3)
        it.skip(-2)

    shutdown_logging()
    content = log_file.read_text(encoding="utf-8")
    assert "linestream.core.cursor" in content
    assert "Rewound 2 line(s)" in content


def test_shutdown_clears_flag() -> None:
    configure_logging(LoggingConfig())
    shutdown_logging()
    assert getattr(logging.getLogger(), _CONFIGURED_FLAG_ATTR) is False
    assert _our_handlers() == []
