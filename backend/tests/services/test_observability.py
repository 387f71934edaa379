"""Structured logging — context fields in both formats, idempotent setup."""

import json
import logging

import pytest

from directory_api.infrastructure.observability import (
    JSONFormatter, TextFormatter, setup_logging,
)


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "directory_api.test", logging.INFO, __file__, 1,
        "Enterprise created", None, None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_includes_context():
    line = JSONFormatter().format(
        make_record(enterprise_id="abc", operation="create", strategy=None),
    )
    entry = json.loads(line)
    assert entry["message"] == "Enterprise created"
    assert entry["level"] == "INFO"
    assert entry["enterprise_id"] == "abc"
    assert entry["operation"] == "create"
    assert "strategy" not in entry


def test_text_formatter_appends_context():
    line = TextFormatter().format(make_record(strategy="location"))
    assert "Enterprise created" in line
    assert line.endswith("strategy=location")


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_logging_is_idempotent(restore_root_logger):
    first = setup_logging("DEBUG", "json")
    second = setup_logging("WARNING", "text")
    root = restore_root_logger
    assert first not in root.handlers
    assert second in root.handlers
    assert isinstance(second.formatter, TextFormatter)
    assert root.level == logging.WARNING
