"""Tests for logging setup."""

import json
import logging

import pytest

pytestmark = pytest.mark.unit

from jotion.config import Settings
from jotion.logging_config import JsonFormatter, configure_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    root.setLevel(level)


def test_json_format(restore_root_logger):
    configure_logging(Settings(log_level="debug", log_format="json"))

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, JsonFormatter)


def test_text_format(restore_root_logger):
    configure_logging(Settings(log_level="WARNING", log_format="text"))

    root = logging.getLogger()
    assert root.level == logging.WARNING
    assert not isinstance(root.handlers[0].formatter, JsonFormatter)


def test_json_formatter_output():
    record = logging.LogRecord(
        "jotion.services", logging.INFO, __file__, 1, "Archived %s", ("doc-1",), None
    )
    payload = json.loads(JsonFormatter().format(record))
    assert payload["level"] == "INFO"
    assert payload["logger"] == "jotion.services"
    assert payload["message"] == "Archived doc-1"
    assert "timestamp" in payload
