"""Tests for the JSON log formatter."""

import json
import logging
import sys

from textmod.logging import JsonFormatter


def _record(msg, *args, exc_info=None):
    return logging.LogRecord("textmod.test", logging.WARNING, __file__, 1, msg, args, exc_info)


def test_json_payload():
    payload = json.loads(JsonFormatter().format(_record("%d errors", 5)))
    assert payload["level"] == "WARNING"
    assert payload["message"] == "5 errors"
    assert payload["logger"] == "textmod.test"
    assert "timestamp" in payload
    assert "exc_info" not in payload


def test_exception_is_included():
    try:
        raise ValueError("bad pattern")
    except ValueError:
        record = _record("failed", exc_info=sys.exc_info())

    payload = json.loads(JsonFormatter().format(record))
    assert "ValueError: bad pattern" in payload["exc_info"]
