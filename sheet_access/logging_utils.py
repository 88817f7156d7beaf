"""
Logging setup for the sheet access service.

Plain text logs by default; single-line JSON logs for deployments whose
log collectors expect structured records.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .config import AccessConfig

TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Fields the service attaches through ``extra=``; grouped under "context"
CONTEXT_FIELDS = ("username", "owner", "target", "role")

_RECORD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}


def access_context(event: str, **fields: str | None) -> dict[str, Any]:
    """Build the ``extra`` mapping for a service log call.

    Usage:
        logger.info("granted viewer", extra=access_context("grant", owner="alice", target="bob"))
    """
    extra: dict[str, Any] = {"event": event}
    extra.update({k: v for k, v in fields.items() if v is not None})
    return extra


def _jsonable(value: Any) -> Any:
    try:
        json.dumps(value)
        return value
    except (TypeError, ValueError):
        return str(value)


class StructuredJsonFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs one JSON object per record:
    - timestamp: ISO 8601 record creation time in UTC
    - level, logger, message
    - event: the service event name, when the call supplied one
    - context: username/owner/target/role passed through access_context()
    - any other extra fields, unchanged
    """

    def format(self, record: logging.LogRecord) -> str:
        log_obj: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        event = getattr(record, "event", None)
        if event is not None:
            log_obj["event"] = event

        context = {
            name: getattr(record, name) for name in CONTEXT_FIELDS if hasattr(record, name)
        }
        if context:
            log_obj["context"] = context

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key in _RECORD_ATTRS or key.startswith("_"):
                continue
            if key == "event" or key in CONTEXT_FIELDS:
                continue
            log_obj[key] = _jsonable(value)

        return json.dumps(log_obj, default=str)


def configure_structured_logging(
    level: int | str = logging.INFO,
    logger_name: str | None = None,
    json_output: bool = True,
) -> logging.Logger:
    """
    Configure a logger with a single stdout handler.

    Args:
        level: Logging level (default: INFO)
        logger_name: Specific logger to configure (default: root logger)
        json_output: Emit JSON records instead of plain text

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(logger_name)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    if json_output:
        handler.setFormatter(StructuredJsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    logger.addHandler(handler)
    logger.setLevel(level)

    return logger


def configure_logging(config: AccessConfig) -> logging.Logger:
    """Configure the root logger from service configuration."""
    return configure_structured_logging(
        level=config.log_level.upper(),
        json_output=config.log_json,
    )
