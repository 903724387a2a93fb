"""Tests for jsonshape.logging."""

from __future__ import annotations

import logging
from pathlib import Path

from jsonshape.logging import configure_logging, get_logger


def test_get_logger_nests_under_package_logger() -> None:
    assert get_logger("core.diff").name == "jsonshape.core.diff"
    assert get_logger().name == "jsonshape"


def test_configure_logging_replaces_handlers(tmp_path: Path) -> None:
    log_file = tmp_path / "nested" / "run.log"
    configure_logging(verbose=True, log_file=log_file)
    logger = configure_logging(verbose=False, log_file=log_file)

    assert logger.level == logging.INFO
    assert len(logger.handlers) == 2
    get_logger("tests").info("written once")

    assert log_file.read_text(encoding="utf-8").count("written once") == 1


def test_configure_logging_without_file_keeps_console_only() -> None:
    logger = configure_logging()

    assert [type(handler) for handler in logger.handlers] == [logging.StreamHandler]
