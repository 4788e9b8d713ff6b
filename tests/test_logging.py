import json
import logging

from worklog.core.logging import JsonLogFormatter
from worklog.middlewares import request_id_ctx_var


def _record(message, **extra):
    record = logging.LogRecord("worklog.test", logging.INFO, __file__, 1, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_emits_json_with_extra_data():
    line = JsonLogFormatter().format(_record("work_session.cloned", extra_data={"work_session_id": 4}))
    payload = json.loads(line)
    assert payload["message"] == "work_session.cloned"
    assert payload["level"] == "INFO"
    assert payload["work_session_id"] == 4
    assert payload["timestamp"].endswith("Z")


def test_formatter_includes_request_id():
    token = request_id_ctx_var.set("abc123")
    try:
        payload = json.loads(JsonLogFormatter().format(_record("hello")))
    finally:
        request_id_ctx_var.reset(token)
    assert payload["request_id"] == "abc123"
