"""Tests for the plugin debug logger."""

import logging
from pathlib import Path

import pytest

from subcheck.verbose import setup_logger, teardown_logger


def test_logger_creates_debug_log(tmp_path: Path):
    debug_file = tmp_path / "logs" / "debug.log"
    logger = setup_logger(debug_file, verbose=False, logger_name="subcheck_test_create")

    assert not logger.disabled
    assert logger.level == logging.DEBUG
    assert debug_file.exists()


def test_logger_writes_timestamped_messages(tmp_path: Path):
    debug_file = tmp_path / "debug.log"
    logger = setup_logger(debug_file, verbose=False, logger_name="subcheck_test_write")

    logger.debug("test message")

    content = debug_file.read_text()
    assert "test message" in content
    assert content.startswith("[")


def test_verbose_mode_adds_stderr_handler(tmp_path: Path):
    quiet = setup_logger(tmp_path / "a.log", verbose=False, logger_name="subcheck_test_quiet")
    assert len(quiet.handlers) == 1
    assert isinstance(quiet.handlers[0], logging.FileHandler)

    loud = setup_logger(tmp_path / "b.log", verbose=True, logger_name="subcheck_test_loud")
    assert len(loud.handlers) == 2
    handler_types = [type(h).__name__ for h in loud.handlers]
    assert "FileHandler" in handler_types
    assert "StreamHandler" in handler_types


def test_unique_logger_names_are_isolated(tmp_path: Path):
    log1 = tmp_path / "one.log"
    log2 = tmp_path / "two.log"
    logger1 = setup_logger(log1, logger_name="subcheck_test_one")
    logger2 = setup_logger(log2, logger_name="subcheck_test_two")

    logger1.debug("Message from one")
    logger2.debug("Message from two")

    assert "Message from one" in log1.read_text()
    assert "Message from two" not in log1.read_text()
    assert "Message from two" in log2.read_text()


def test_same_logger_name_raises_error(tmp_path: Path):
    setup_logger(tmp_path / "first.log", logger_name="subcheck_test_shared")

    with pytest.raises(RuntimeError) as exc_info:
        setup_logger(tmp_path / "second.log", logger_name="subcheck_test_shared")

    error_msg = str(exc_info.value)
    assert "subcheck_test_shared" in error_msg
    assert "already exists" in error_msg


def test_teardown_allows_setup_again(tmp_path: Path):
    setup_logger(tmp_path / "first.log", logger_name="subcheck_test_again")
    teardown_logger("subcheck_test_again")
    logger = setup_logger(tmp_path / "second.log", logger_name="subcheck_test_again")
    assert len(logger.handlers) == 1
