"""
VargaCore Structured JSON Logging

Provides structured logging with JSON output for production environments.
"""

import json
import logging
import sys

from typing import Any

_RESERVED_ATTRS = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
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
    "getMessage",
    "exc_info",
    "exc_text",
    "stack_info",
}


class JsonFormatter(logging.Formatter):
    """JSON formatter for structured logging output"""

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record as JSON

        Args:
            record: Python logging record

        Returns:
            JSON-formatted log string
        """
        base = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            base["exception"] = self.formatException(record.exc_info)

        # Extra fields from logger.info("msg", extra={...})
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and key not in base:
                base[key] = value

        return json.dumps(base, default=str)


def setup_logging(level: str = "INFO", format_json: bool = True) -> None:
    """
    Setup structured logging for VargaCore

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: Whether to use JSON formatting
    """
    root = logging.getLogger()
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)

    if format_json:
        handler.setFormatter(JsonFormatter())
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        handler.setFormatter(formatter)

    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper()))


def get_logger(name: str, extra_fields: dict[str, Any] | None = None) -> logging.Logger:
    """
    Get logger with optional extra fields

    Args:
        name: Logger name (usually __name__)
        extra_fields: Additional fields to include in all log messages

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if extra_fields:
        return logging.LoggerAdapter(logger, extra_fields)

    return logger


def get_varga_logger(module: str) -> logging.Logger:
    """Get logger for divisional chart modules"""
    return get_logger(
        f"vargacore.varga.{module}", {"system": "varga", "domain": "astrology"}
    )
