#!/usr/bin/env python3
"""
Unit tests for logging utilities (logging/logging_util.py)
"""

import logging

import pytest

from threadbench.logging import (
    FlushingFileHandler,
    FlushingStreamHandler,
    get_file_only_logger,
    get_logger,
)


@pytest.mark.unit
class TestGetLogger:
    """Test get_logger"""

    def test_console_only(self):
        logger = get_logger("threadbench.test_console")
        assert logger.level == logging.DEBUG
        assert logger.propagate is False
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], FlushingStreamHandler)
        assert logger.handlers[0].level == logging.INFO

    def test_console_level(self):
        logger = get_logger("threadbench.test_level", console_level=logging.WARNING)
        assert logger.handlers[0].level == logging.WARNING

    def test_file_handler_writes_thread_name(self, tmp_path):
        log_file = tmp_path / "run.log"
        logger = get_logger("threadbench.test_file", log_file=log_file, console=False)

        logger.info("phase finished")

        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], FlushingFileHandler)
        text = log_file.read_text()
        assert "[threadbench.test_file] [MainThread] [INFO] phase finished" in text
        logger.handlers[0].close()

    def test_reconfigure_replaces_handlers(self, tmp_path):
        name = "threadbench.test_reconfigure"
        get_logger(name, log_file=tmp_path / "a.log")
        logger = get_logger(name)
        assert len(logger.handlers) == 1

    def test_append_mode(self, tmp_path):
        log_file = tmp_path / "run.log"
        log_file.write_text("earlier run\n")
        logger = get_logger("threadbench.test_append", log_file=log_file, overwrite=False, console=False)
        logger.warning("later run")
        logger.handlers[0].close()

        lines = log_file.read_text().splitlines()
        assert lines[0] == "earlier run"
        assert lines[1].endswith("later run")


@pytest.mark.unit
def test_file_only_logger(tmp_path):
    log_file = tmp_path / "only.log"
    logger = get_file_only_logger("threadbench.test_file_only", log_file, level=logging.WARNING)

    logger.info("hidden")
    logger.error("shown")
    logger.handlers[0].close()

    text = log_file.read_text()
    assert "hidden" not in text
    assert "shown" in text
