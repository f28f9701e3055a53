"""
File: tests/core/test_logger_setup.py
-------------------------------------
Logging configuration helpers.
"""

import logging

import pytest

from wabot_core import logger_setup
from wabot_core.logger_setup import _DuplicateFilter, merge_dicts, setup_logging


def test_merge_dicts_nested_and_mismatch():
    base = {"root": {"level": "INFO", "handlers": ["rich"]}, "version": 1}
    with pytest.warns(UserWarning):
        merge_dicts(base, {"root": {"level": "DEBUG"}, "version": "1"})
    assert base["root"] == {"level": "DEBUG", "handlers": ["rich"]}
    assert base["version"] == "1"


def test_duplicate_filter_drops_repeats():
    filt = _DuplicateFilter(window=2)

    def record(msg):
        return logging.LogRecord("x", logging.INFO, __file__, 1, msg, None, None)

    assert filt.filter(record("a"))
    assert not filt.filter(record("a"))
    assert filt.filter(record("b"))
    assert filt.filter(record("c"))
    assert filt.filter(record("a"))


def test_setup_logging_respects_env_level(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "error")
    try:
        setup_logging(force=True)
        assert logging.getLogger().level == logging.ERROR
    finally:
        monkeypatch.delenv("LOG_LEVEL")
        setup_logging({"root": {"level": "WARNING"}}, force=True)


def test_setup_logging_is_idempotent(monkeypatch):
    monkeypatch.setattr(logger_setup, "_CONFIGURED", True)
    root = logging.getLogger()
    level = root.level
    setup_logging({"root": {"level": "DEBUG"}})
    assert root.level == level

# End of tests/core/test_logger_setup.py
