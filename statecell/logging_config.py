"""
Logging configuration for statecell.

Provides text or JSON-formatted logs with a dispatch_id field for
correlating the log lines of one dispatch (command, before/after state,
notifications).

Environment Variables:
    STATECELL_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR) - default: WARNING
    STATECELL_LOG_FORMAT: Log format (json, text) - default: text

Usage:
    from statecell.logging_config import setup_logging, get_logger

    setup_logging()
    logger = get_logger(__name__, dispatch_id="cmd-7")
    logger.info("Dispatching", extra={"tag": "INCREMENT"})
"""

import logging
import os
import sys
from typing import Optional

from pythonjsonlogger.json import JsonFormatter

HANDLER_NAME = "statecell-console"

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class DispatchIDFilter(logging.Filter):
    """
    Logging filter that adds dispatch_id to all log records.

    Ensures all logs have a dispatch_id field, even if not set via LoggerAdapter.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "dispatch_id"):
            record.dispatch_id = "N/A"  # type: ignore
        return True


def setup_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> logging.Handler:
    """
    Configure root logger.

    Explicit arguments win over environment variables:
    - STATECELL_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: WARNING)
    - STATECELL_LOG_FORMAT: json, text (default: text)

    Logs go to stderr so command output on stdout stays machine readable.

    Returns:
        The handler installed on the root logger
    """
    log_level = (level or os.getenv("STATECELL_LOG_LEVEL", "WARNING")).upper()
    fmt = (log_format or os.getenv("STATECELL_LOG_FORMAT", "text")).lower()
    if fmt not in ("json", "text"):
        raise ValueError(f"Unknown log format: {fmt!r} (expected 'json' or 'text')")

    numeric_level = LEVELS.get(log_level, logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setLevel(numeric_level)
    handler.addFilter(DispatchIDFilter())

    if fmt == "json":
        formatter: logging.Formatter = JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s %(dispatch_id)s",
            rename_fields={
                "asctime": "timestamp",
                "name": "logger",
                "levelname": "level",
            },
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s [dispatch_id=%(dispatch_id)s]",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    return handler


def get_logger(name: str, dispatch_id: Optional[str] = None) -> logging.LoggerAdapter:
    """
    Get a logger with optional dispatch_id for correlation.

    Args:
        name: Logger name (typically __name__)
        dispatch_id: Correlation id (typically a per-command counter)

    Returns:
        LoggerAdapter with dispatch_id in extra fields
    """
    logger = logging.getLogger(name)
    return logging.LoggerAdapter(logger, {"dispatch_id": dispatch_id or "N/A"})
