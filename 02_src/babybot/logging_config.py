"""Structured logging configuration for Baby Bot."""

import json
import logging
import logging.config
import logging.handlers
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .config import DEFAULT_LOG_PATH

# Third-party loggers that are too chatty at INFO
QUIET_LOGGERS = ("aiosqlite", "httpx", "httpcore")


class JSONFormatter(logging.Formatter):
    """Render each record as one JSON line with optional turn context."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}:{record.funcName}:{record.lineno}",
        }

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        # Set via extra=log_context(...)
        context = getattr(record, "context", None)
        if context:
            entry["context"] = context

        return json.dumps(entry, default=str)


def build_logging_config(log_level: str, log_file: str) -> dict[str, Any]:
    """Return the dictConfig mapping for a JSON file + stdout setup."""
    # Rotating file keeps the last few runs around
    file_handler = {
        "class": "logging.handlers.RotatingFileHandler",
        "filename": log_file,
        "maxBytes": 5 * 1024 * 1024,  # 5 MB
        "backupCount": 3,
        "formatter": "json",
        "encoding": "utf-8",
    }

    # Console mirrors the file
    console_handler = {
        "class": "logging.StreamHandler",
        "formatter": "json",
        "stream": "ext://sys.stdout",
    }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"json": {"()": JSONFormatter}},
        "handlers": {"file": file_handler, "console": console_handler},
        "loggers": {name: {"level": "WARNING"} for name in QUIET_LOGGERS},
        "root": {
            "level": log_level.upper(),
            "handlers": ["file", "console"],
        },
    }


def setup_logging(
    log_level: str | None = None,
    log_file: str | None = None,
) -> None:
    """
    Setup structured logging for the bot.

    Args:
        log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
                   Defaults to LOG_LEVEL env var or INFO.
        log_file: Path to log file. Defaults to 04_logs/app.log.
    """
    # Determine log level
    if log_level is None:
        log_level = os.getenv("LOG_LEVEL", "INFO")

    # Determine log file path
    if log_file is None:
        log_file = str(DEFAULT_LOG_PATH)

    # Create logs directory if it doesn't exist
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    # Configure root logger
    logging.config.dictConfig(build_logging_config(log_level, log_file))


def log_context(**context) -> dict:
    """Build the ``extra`` mapping that JSONFormatter renders as ``context``."""
    return {"context": {k: v for k, v in context.items() if v is not None}}


def get_logger(name: str) -> logging.Logger:
    """Module-level logger, e.g. ``get_logger(__name__)``."""
    return logging.getLogger(name)
