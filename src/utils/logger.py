"""
Structured logging utilities for the chat client.
Log messages are event names; context travels as keyword fields and every
record is tagged with the current chat session id.
"""

import logging
import json
from typing import Any
from contextvars import ContextVar

# Chat session the current code path is working for
session_id_ctx: ContextVar[str | None] = ContextVar("session_id", default=None)


class StructuredFormatter(logging.Formatter):
    """
    Formats records as single-line JSON documents.
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record with its event fields and session id.

        Args:
            record: Log record to format

        Returns:
            JSON-formatted log string
        """
        log_data = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }

        session_id = getattr(record, "session_id", None)
        if session_id:
            log_data["session_id"] = session_id

        log_data.update(getattr(record, "extra_fields", {}))

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class PlainFormatter(logging.Formatter):
    """Human readable formatter that appends event fields as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = dict(getattr(record, "extra_fields", {}))
        session_id = getattr(record, "session_id", None)
        if session_id:
            fields = {"session_id": session_id, **fields}
        if fields:
            line += " | " + " ".join(f"{key}={value}" for key, value in fields.items())
        return line


class StructuredLogger:
    """
    Wrapper around a standard logger taking event names plus keyword fields.
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def _log(
        self, level: int, event: str, exc_info: bool = False, **fields: Any
    ) -> None:
        extra = {"extra_fields": fields, "session_id": session_id_ctx.get()}
        self.logger.log(level, event, extra=extra, exc_info=exc_info)

    def debug(self, event: str, **fields: Any) -> None:
        """Log debug event with context."""
        self._log(logging.DEBUG, event, **fields)

    def info(self, event: str, **fields: Any) -> None:
        """Log info event with context."""
        self._log(logging.INFO, event, **fields)

    def warning(self, event: str, **fields: Any) -> None:
        """Log warning event with context."""
        self._log(logging.WARNING, event, **fields)

    def error(self, event: str, exc_info: bool = False, **fields: Any) -> None:
        """
        Log error event with context.

        Args:
            event: Event name
            exc_info: If True, include exception traceback
            **fields: Additional context fields
        """
        self._log(logging.ERROR, event, exc_info=exc_info, **fields)


def get_logger(name: str) -> StructuredLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        StructuredLogger instance
    """
    return StructuredLogger(name)


def set_session_id(session_id: str | None) -> None:
    """Tag subsequent log records in this context with a chat session id."""
    session_id_ctx.set(session_id)


def configure_logging(level: str = "INFO", use_structured: bool = False) -> None:
    """
    Configure application-wide logging.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        use_structured: If True, use JSON log lines
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)

    if use_structured:
        formatter = StructuredFormatter(datefmt="%Y-%m-%d %H:%M:%S")
    else:
        formatter = PlainFormatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)
