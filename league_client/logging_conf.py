"""Logging configuration for the client.

JSON-line output, one object per record, so client events can be shipped next to
the service's own logs. Credential fields are masked before a record is written,
and setup_logging() is idempotent: calling it repeatedly
(CLI re-entry, tests) never duplicates handlers.
"""
from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from logging import Handler, LogRecord
from typing import Any

# Attributes every LogRecord carries; anything else came in through `extra=`.
_RESERVED = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
    }
)


# Field names whose values are credentials; compared case-insensitively.
SENSITIVE_KEYS = frozenset({"token", "password", "authorization"})
MASK = "***"


def _mask(fields: dict[str, Any]) -> dict[str, Any]:
    return {k: MASK if k.lower() in SENSITIVE_KEYS else v for k, v in fields.items()}


class JsonFormatter(logging.Formatter):
    """One JSON object per line: ts, level, logger, message plus `extra=` fields.

    A dict passed as the message is merged into the object. Fields named in
    SENSITIVE_KEYS are written as MASK.
    """

    def format(self, record: LogRecord) -> str:  # type: ignore[override]
        payload: dict[str, Any] = {
            "ts": datetime.now(UTC).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
        }

        fields = {k: v for k, v in record.__dict__.items() if k not in _RESERVED}
        if isinstance(record.msg, dict):
            fields.update(record.msg)
        else:
            fields["message"] = record.getMessage()

        for key, value in _mask(fields).items():
            payload.setdefault(key, value)

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def _make_stream_handler(level: int) -> Handler:
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(JsonFormatter())
    return handler


def is_json_handler(handler: Handler) -> bool:
    return isinstance(handler.formatter, JsonFormatter)


def setup_logging(level: str | int = "INFO") -> None:
    """Configure the root logger for JSON output.

    Idempotent: returns early once a JsonFormatter handler is on the root
    logger. Handlers installed by others (pytest's capture, an embedding app)
    are left alone. The httpx/httpcore loggers are raised to WARNING so the
    pipeline's own request events are the single record of each call.
    """
    root = logging.getLogger()

    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    if any(is_json_handler(h) for h in root.handlers):
        return

    root.setLevel(level)
    root.addHandler(_make_stream_handler(level))

    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger.

    Usage: logger = get_logger("league_client.session")
    """
    return logging.getLogger(name if name else __name__)
