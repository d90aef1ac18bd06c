"""Tests for logging configuration."""
import json
import logging
from types import SimpleNamespace

from userapi.core.logging import DevFormatter, JSONFormatter, redact_email, request_extra, setup_logging


def _record(message="Swept %d tokens", args=(3,), **extra) -> logging.LogRecord:
    record = logging.LogRecord("userapi.test", logging.INFO, __file__, 1, message, args, None)
    record.__dict__.update(extra)
    return record


def _request(method="PUT", path="/api/1.0/users/5"):
    return SimpleNamespace(method=method, url=SimpleNamespace(path=path))


def test_redact_email():
    assert redact_email("user1@mail.com") == "us***@mail.com"
    assert redact_email("no-at-sign") == "redacted"


def test_request_extra():
    assert request_extra(_request()) == {"method": "PUT", "path": "/api/1.0/users/5"}
    assert request_extra(_request(), user_id=5)["user_id"] == 5


def test_json_formatter_outputs_one_object():
    entry = json.loads(JSONFormatter().format(_record()))

    assert entry["level"] == "INFO"
    assert entry["logger"] == "userapi.test"
    assert entry["message"] == "Swept 3 tokens"
    assert "path" not in entry


def test_json_formatter_includes_request_context():
    record = _record("ForbiddenError: unauthorised_user_update", (), **request_extra(_request(), user_id=6))

    entry = json.loads(JSONFormatter().format(record))

    assert entry["method"] == "PUT"
    assert entry["path"] == "/api/1.0/users/5"
    assert entry["user_id"] == 6


def test_dev_formatter_appends_request_context():
    line = DevFormatter().format(_record("Unrecognised bearer token", (), **request_extra(_request("GET", "/health"))))

    assert line.endswith("Unrecognised bearer token [method=GET path=/health]")


def test_setup_logging_structured():
    setup_logging("WARNING", "structured")

    assert logging.root.level == logging.WARNING
    assert len(logging.root.handlers) == 1
    assert isinstance(logging.root.handlers[0].formatter, JSONFormatter)
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

    setup_logging("INFO", "dev")
    assert logging.root.level == logging.INFO
    assert isinstance(logging.root.handlers[0].formatter, DevFormatter)
