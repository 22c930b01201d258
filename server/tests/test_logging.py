"""Tests for the JSON log formatter."""

import json
import logging
import sys

from binnacle.logging import JsonFormatter, setup_logging


def make_record(msg, *args, extra=None, exc_info=None):
    logger = logging.getLogger("binnacle.services.cache")
    return logger.makeRecord(
        logger.name, logging.WARNING, "cache.py", 42, msg, args, exc_info, extra=extra
    )


def test_payload_carries_environment_and_location():
    payload = json.loads(JsonFormatter("development").format(make_record("swept %d entries", 3)))

    assert payload["env"] == "development"
    assert payload["level"] == "WARNING"
    assert payload["logger"] == "binnacle.services.cache"
    assert payload["msg"] == "swept 3 entries"
    assert payload["where"].endswith(":42")
    assert "ts" in payload


def test_extra_fields_are_included():
    record = make_record("invalidated cache entries", extra={"pattern": "games", "removed": 2})
    payload = json.loads(JsonFormatter().format(record))

    assert payload["pattern"] == "games"
    assert payload["removed"] == 2
    assert payload["env"] == "production"
    assert "args" not in payload


def test_exception_is_formatted():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = make_record("failed", exc_info=sys.exc_info())

    payload = json.loads(JsonFormatter().format(record))
    assert "RuntimeError: boom" in payload["exc_info"]


def test_setup_logging_attaches_one_handler():
    logger = logging.getLogger("binnacle")
    before = [h for h in logger.handlers if isinstance(h.formatter, JsonFormatter)]

    setup_logging("debug", "development")
    setup_logging("info", "development")

    handlers = [h for h in logger.handlers if isinstance(h.formatter, JsonFormatter)]
    assert len(handlers) == max(1, len(before))
    assert logger.level == logging.INFO
