"""Tests for revisionist.logging_config."""
from __future__ import annotations

import logging

import pytest

from revisionist.logging_config import FORMATS, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:

    def test_single_handler_after_repeated_calls(self):
        setup_logging("INFO", "json")
        handler = setup_logging("INFO", "json")
        assert logging.getLogger().handlers == [handler]

    def test_level_applied(self):
        setup_logging("debug", "text")
        assert logging.getLogger().level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self):
        setup_logging("chatty", "text")
        assert logging.getLogger().level == logging.INFO

    def test_format_selection(self):
        assert setup_logging("INFO", "json").formatter._fmt == FORMATS["json"]
        assert setup_logging("INFO", "yaml").formatter._fmt == FORMATS["text"]

    def test_urllib3_quieted(self):
        setup_logging("DEBUG", "text")
        assert logging.getLogger("urllib3").level == logging.WARNING
