"""Logging configuration.

Request-scoped log calls pass ``extra={"method": ..., "path": ...}`` (and
``user_id`` once known); the structured format lifts those into the JSON
line, the dev format appends them to the message.
"""
import json
import logging
import sys

DEV_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
REQUEST_FIELDS = ("method", "path", "user_id")
QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "asyncpg", "uvicorn.access")


def request_extra(request, user_id: int | None = None) -> dict:
    """Build the ``extra`` mapping for a log call made while serving a request."""
    extra = {"method": request.method, "path": request.url.path}
    if user_id is not None:
        extra["user_id"] = user_id
    return extra


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with request context when present."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in REQUEST_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                entry[field] = value
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str, ensure_ascii=False)


class DevFormatter(logging.Formatter):
    def __init__(self):
        super().__init__(DEV_FORMAT, datefmt="%H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = " ".join(
            f"{field}={getattr(record, field)}"
            for field in REQUEST_FIELDS
            if getattr(record, field, None) is not None
        )
        return f"{line} [{context}]" if context else line


def setup_logging(level: str = "INFO", format_type: str = "dev") -> None:
    """Install a single stdout handler on the root logger.

    ``format_type`` is "structured" for JSON lines or "dev" for text.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter() if format_type == "structured" else DevFormatter())

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level.upper())

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def redact_email(email: str) -> str:
    """Keep the first two characters of the local part and the domain."""
    if "@" not in email:
        return "redacted"
    local, domain = email.split("@", 1)
    return f"{local[:2]}***@{domain}"
