"""Tests for docdata.logging."""

from __future__ import annotations

import logging
from pathlib import Path

from docdata.logging import configure_logging, get_logger


def test_get_logger_names_stage_under_docdata() -> None:
    assert get_logger().name == "docdata"
    assert get_logger("extractor").name == "docdata.extractor"


def test_configure_logging_writes_debug_to_file_when_verbose(tmp_path: Path) -> None:
    log_file = tmp_path / "docdata.log"

    logger = configure_logging(verbose=True, log_file=log_file)
    get_logger("extractor").debug("Skipping Function demo::f")
    for handler in logger.handlers:
        handler.flush()

    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2
    assert "Skipping Function demo::f" in log_file.read_text(encoding="utf-8")


def test_configure_logging_replaces_existing_handlers() -> None:
    configure_logging()
    logger = configure_logging()

    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
