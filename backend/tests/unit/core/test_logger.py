"""Unit tests for JSON logging and request correlation."""

from __future__ import annotations

import json
import logging

from authgate.core.logger import JSONFormatter, ensure_request_id


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="authgate.test",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="retrying %s",
        args=("txn",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_promotes_known_extras():
    line = JSONFormatter().format(make_record(attempt=2, sqlstate="40001", secret="x"))
    payload = json.loads(line)

    assert payload["message"] == "retrying txn"
    assert payload["level"] == "WARNING"
    assert payload["attempt"] == 2
    assert payload["sqlstate"] == "40001"
    assert "secret" not in payload


def test_request_id_is_stable_within_a_request(app):
    with app.test_request_context(headers={"X-Correlation-ID": "corr-9"}):
        assert ensure_request_id() == "corr-9"
        assert ensure_request_id() == "corr-9"

    with app.test_request_context():
        first = ensure_request_id()
        assert ensure_request_id() == first


def test_request_id_outside_request_is_fresh():
    assert ensure_request_id() != ensure_request_id()
