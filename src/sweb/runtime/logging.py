"""
SWeb Logging Infrastructure.

Library modules only call ``logging.getLogger(__name__)``; handlers are
installed here, by the CLI and the server, never at import time.

- Console output on stderr, human-readable
- Optional JSONL file (``sweb.log``) with structured context, one JSON
  object per line
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

LOG_LEVEL_ENV = "SWEB_LOG_LEVEL"
LOG_FILENAME = "sweb.log"

# =============================================================================
# Terminal Colors (respects NO_COLOR)
# =============================================================================

_NO_COLOR = bool(os.environ.get("NO_COLOR")) or not sys.stderr.isatty()


class Colors:
    """ANSI color codes for terminal output."""

    RESET = "" if _NO_COLOR else "\033[0m"
    DIM = "" if _NO_COLOR else "\033[2m"

    DEBUG = "" if _NO_COLOR else "\033[36m"  # Cyan
    WARNING = "" if _NO_COLOR else "\033[33m"  # Yellow
    ERROR = "" if _NO_COLOR else "\033[31m"  # Red
    CRITICAL = "" if _NO_COLOR else "\033[35m"  # Magenta
    COMPONENT = "" if _NO_COLOR else "\033[34m"  # Blue


def _component(record: logging.LogRecord) -> str:
    """Short component tag from the logger name: ``sweb.core.lexer`` -> ``lexer``."""
    return record.name.rsplit(".", 1)[-1]


# =============================================================================
# Formatters
# =============================================================================


class JSONLFormatter(logging.Formatter):
    """
    Formats log records as JSON Lines.

    Example output:
    {"timestamp":"2026-01-15T10:30:45.123000Z","level":"INFO","component":"storage","message":"Created app 1","context":{"app_id":1}}
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc)
            .replace(tzinfo=None)
            .isoformat()
            + "Z",
            "level": record.levelname,
            "component": _component(record),
            "message": record.getMessage(),
        }

        context = getattr(record, "context", None)
        if context:
            entry["context"] = context

        if record.exc_info and record.exc_info[0]:
            entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
            }

        return json.dumps(entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """Human-readable formatter for console output."""

    LEVEL_COLORS = {
        logging.DEBUG: Colors.DEBUG,
        logging.WARNING: Colors.WARNING,
        logging.ERROR: Colors.ERROR,
        logging.CRITICAL: Colors.CRITICAL,
    }

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        component = _component(record)

        if _NO_COLOR:
            prefix = f"[{timestamp}] [{component}]"
        else:
            prefix = (
                f"{Colors.DIM}{timestamp}{Colors.RESET} "
                f"{Colors.COMPONENT}[{component}]{Colors.RESET}"
            )

        # Level only for non-INFO messages
        if record.levelno != logging.INFO:
            level_name = record.levelname
            if not _NO_COLOR:
                level_name = f"{self.LEVEL_COLORS.get(record.levelno, '')}{level_name}{Colors.RESET}"
            prefix = f"{prefix} {level_name}:"

        return f"{prefix} {record.getMessage()}"


# =============================================================================
# Logger Setup
# =============================================================================


def resolve_level(level: int | str | None = None) -> int:
    """
    Resolve a log level from an explicit value or ``SWEB_LOG_LEVEL``.

    Unknown names fall back to INFO.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(
    level: int | str | None = None,
    log_dir: Path | str | None = None,
    max_bytes: int = 5 * 1024 * 1024,  # 5MB
    backup_count: int = 3,
) -> Path | None:
    """
    Configure the ``sweb`` logger hierarchy.

    Args:
        level: Minimum log level (name or number); defaults to ``SWEB_LOG_LEVEL`` or INFO
        log_dir: Directory for the JSONL log file; no file logging when None
        max_bytes: Max size per log file before rotation
        backup_count: Number of rotated files to keep

    Returns:
        Path to the log file, or None when only console logging is active
    """
    resolved = resolve_level(level)

    root_logger = logging.getLogger("sweb")
    root_logger.setLevel(resolved)
    root_logger.handlers.clear()
    root_logger.propagate = False

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(ConsoleFormatter())
    console_handler.setLevel(resolved)
    root_logger.addHandler(console_handler)

    if log_dir is None:
        return None

    directory = Path(log_dir)
    directory.mkdir(parents=True, exist_ok=True)
    log_file = directory / LOG_FILENAME

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    file_handler.setFormatter(JSONLFormatter())
    file_handler.setLevel(resolved)
    root_logger.addHandler(file_handler)

    log_with_context(
        root_logger,
        logging.DEBUG,
        "SWeb logging initialized",
        log_format="jsonl",
        log_file=str(log_file),
    )
    return log_file


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    context: dict[str, Any] | None = None,
    **kwargs: Any,
) -> None:
    """
    Log a message with structured context data.

    The context appears as the ``context`` object in JSONL output; the
    console shows the message only.

    Args:
        logger: Logger instance
        level: Logging level (logging.INFO, logging.ERROR, etc.)
        message: Human-readable message
        context: Structured context data
        **kwargs: Additional context items
    """
    extra = {"context": {**(context or {}), **kwargs}} if (context or kwargs) else {}
    logger.log(level, message, extra=extra)
