"""
Centralized logging configuration with structured logging support.
"""
import json
import logging
import logging.config
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from app.core.config import settings

# Context variable for request ID correlation.
# Set by RequestLoggingMiddleware so every log entry emitted while serving
# a request carries the same request_id.
request_id_context: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

# Structured fields copied from LogRecord extras into JSON output
_EXTRA_FIELDS = (
    "method",
    "path",
    "status_code",
    "duration_ms",
    "client_host",
    "user_identifier",
    "error_id",
    "event_data",
)

# Third-party loggers held at WARNING; the Gemini client logs every request
_QUIET_LOGGERS = ("sqlalchemy.engine", "google.generativeai", "urllib3", "httpx")


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for production logging.

    Produces structured log entries with consistent fields for log aggregation.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        log_entry: Dict[str, Any] = {
            "timestamp": timestamp.isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = request_id_context.get()
        if request_id:
            log_entry["request_id"] = request_id

        for field in _EXTRA_FIELDS:
            if hasattr(record, field):
                log_entry[field] = getattr(record, field)

        # Add source location for error-level logs
        if record.levelno >= logging.ERROR:
            log_entry["source"] = f"{record.pathname}:{record.lineno}"

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def setup_logging() -> None:
    """
    Configure application-wide logging.

    Production emits one JSON object per line; other environments use a
    plain text format. Request logs from uvicorn are suppressed in DEBUG
    because RequestLoggingMiddleware already records every request.
    """
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    formatter = "json" if settings.ENV == "production" else "text"

    loggers: Dict[str, Dict[str, Any]] = {
        "app": {"level": log_level, "handlers": ["console"], "propagate": False},
        "uvicorn.access": {
            "level": logging.WARNING if settings.DEBUG else logging.INFO,
            "handlers": ["console"],
            "propagate": False,
        },
    }
    for name in _QUIET_LOGGERS:
        loggers[name] = {
            "level": logging.WARNING,
            "handlers": ["console"],
            "propagate": False,
        }

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "text": {
                    "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                    "datefmt": "%Y-%m-%dT%H:%M:%S",
                },
                "json": {"()": JSONFormatter},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": log_level,
                    "formatter": formatter,
                    "stream": sys.stdout,
                },
            },
            "root": {"level": log_level, "handlers": ["console"]},
            "loggers": loggers,
        }
    )
