"""Tests for log level handling."""

import logging

import pytest

from svcctl.utils.constants import LOG_FORMAT
from svcctl.utils.logging_setup import apply_log_level, level_from_name, setup_logging


@pytest.fixture
def restore_level():
    logger = logging.getLogger("svcctl")
    level = logger.level
    yield logger
    logger.setLevel(level)


@pytest.mark.parametrize("name,level", [
    ("DEBUG", logging.DEBUG),
    ("info", logging.INFO),
    ("WARN", logging.WARNING),
    ("Warning", logging.WARNING),
    ("ERROR", logging.ERROR),
    ("FATAL", logging.CRITICAL),
    ("", logging.INFO),
    (None, logging.INFO),
    (5, logging.INFO),
    ("VERBOSE", logging.INFO),
])
def test_level_from_name(name, level):
    assert level_from_name(name) == level


def test_apply_log_level(restore_level):
    assert apply_log_level("ERROR") == logging.ERROR
    assert restore_level.level == logging.ERROR


def test_apply_unknown_level(restore_level):
    assert apply_log_level("LOUD") == logging.INFO
    assert restore_level.level == logging.INFO


@pytest.fixture
def bare_root(monkeypatch):
    root = logging.RootLogger(logging.WARNING)
    monkeypatch.setattr(logging, "root", root)
    yield root
    for handler in root.handlers:
        handler.close()


def test_setup_logging_with_file(bare_root, tmp_path):
    log_file = tmp_path / "logs" / "svcctl.log"
    setup_logging("DEBUG", log_file=log_file)

    assert bare_root.level == logging.DEBUG
    assert [type(h) for h in bare_root.handlers] == [logging.StreamHandler, logging.FileHandler]
    assert bare_root.handlers[0].formatter._fmt == LOG_FORMAT

    bare_root.debug("written to file")
    bare_root.handlers[1].flush()
    assert "root - DEBUG - written to file" in log_file.read_text()


def test_setup_logging_stream_only(bare_root):
    setup_logging(logging.WARNING)
    assert bare_root.level == logging.WARNING
    assert [type(h) for h in bare_root.handlers] == [logging.StreamHandler]


def test_apply_non_string_level(restore_level):
    assert apply_log_level(5) == logging.INFO
    assert restore_level.level == logging.INFO
