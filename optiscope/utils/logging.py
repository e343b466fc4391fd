"""Structured logging for optiscope.

Provides JSON- or text-formatted logging with context support so that
indicator runs can be traced per symbol and expiration.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from config.settings import LoggingConfig

# Attributes present on every LogRecord; anything else came in via ``extra``
_RESERVED_ATTRS = frozenset((
    "name", "msg", "args", "created", "filename",
    "funcName", "levelname", "levelno", "lineno",
    "module", "msecs", "pathname", "process",
    "processName", "relativeCreated", "stack_info",
    "thread", "threadName", "exc_info", "exc_text",
    "message", "asctime", "taskName",
))


def _record_extras(record: logging.LogRecord) -> dict:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RESERVED_ATTRS
    }


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def __init__(self, include_extras: bool = True):
        """Initialize JSON formatter.

        Args:
            include_extras: Include extra fields in output
        """
        super().__init__()
        self._include_extras = include_extras

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON-formatted string
        """
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.pathname:
            log_data["location"] = {
                "file": record.filename,
                "line": record.lineno,
                "function": record.funcName,
            }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if self._include_extras:
            extras = {}
            for key, value in _record_extras(record).items():
                try:
                    json.dumps(value)
                    extras[key] = value
                except (TypeError, ValueError):
                    extras[key] = str(value)

            if extras:
                log_data["context"] = extras

        return json.dumps(log_data)


class TextFormatter(logging.Formatter):
    """Text formatter with context support."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as text, appending ``key=value`` context."""
        base = super().format(record)

        extras = [f"{key}={value}" for key, value in _record_extras(record).items()]
        if extras:
            return f"{base} | {' '.join(extras)}"

        return base


def setup_logging(
    level: str = "INFO",
    format: str = "text",
    file: str | Path | None = None,
    rotate_size_mb: int = 10,
    retain_count: int = 5,
) -> None:
    """Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        format: Log format ('json' or 'text')
        file: Log file path (None for stdout only)
        rotate_size_mb: Log rotation size in MB
        retain_count: Number of rotated files to retain
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    root_logger.handlers.clear()

    if format == "json":
        formatter = JSONFormatter()
    else:
        formatter = TextFormatter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if file:
        file_path = Path(file)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            file_path,
            maxBytes=rotate_size_mb * 1024 * 1024,
            backupCount=retain_count,
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def setup_logging_from_config(config: "LoggingConfig") -> None:
    """Configure logging from a :class:`LoggingConfig` instance."""
    setup_logging(
        level=config.level,
        format=config.format,
        file=config.file,
        rotate_size_mb=config.rotate_size_mb,
        retain_count=config.retain_count,
    )
