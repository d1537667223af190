"""
Module: tests/unit/test_logging.py

What:
    Check the JSON record layout and the masking of message content in log
    context.

Why:
    Logs leave the export boundary without redaction by the category engine,
    so message content must never reach them verbatim.
"""

import io
import json

from mailexport.utils.logging import REDACTED, JsonLogger, get_logger


def _records(stream):
    return [json.loads(line) for line in stream.getvalue().splitlines()]


def test_record_layout():
    stream = io.StringIO()
    logger = JsonLogger(stream=stream, component="engine")
    logger.info("batch_transformed", messages=3)
    logger.warning("slow")
    (first, second) = _records(stream)
    assert first["lvl"] == "INFO"
    assert first["msg"] == "batch_transformed"
    assert first["component"] == "engine"
    assert first["messages"] == 3
    assert "ts" in first
    assert second["lvl"] == "WARN"


def test_sensitive_keys_are_masked_recursively():
    stream = io.StringIO()
    logger = JsonLogger(stream=stream)
    logger.error(
        "row_failed",
        subject="Your statement",
        rows=[{"body_text": "SSN 123-45-6789", "attachment_count": "2"}],
        context={"from_email": "jane@example.com"},
    )
    (record,) = _records(stream)
    assert record["subject"] == REDACTED
    assert record["rows"] == [{"body_text": REDACTED, "attachment_count": "2"}]
    assert record["context"] == {"from_email": REDACTED}


def test_non_json_values_are_stringified():
    stream = io.StringIO()
    JsonLogger(stream=stream).info("paths", path=io)
    (record,) = _records(stream)
    assert isinstance(record["path"], str)


def test_get_logger_sets_component():
    assert get_logger("cli").component == "cli"
