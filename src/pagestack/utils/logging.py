"""Logging setup for the pagestack command line.

Three output shapes, picked from the global CLI flags:
- default: [LEVEL] message
- --verbose: [LEVEL][HH:MM:SS] message, DEBUG enabled
- --ci: one JSON object per line, with build counters merged in

Everything goes to stderr so `pagestack render` can pipe pages on stdout.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any, TextIO


class PageStackFormatter(logging.Formatter):
    """Plain text formatter, optionally stamped with the record time."""

    def __init__(self, timestamps: bool = False) -> None:
        super().__init__()
        self.timestamps = timestamps

    def format(self, record: logging.LogRecord) -> str:
        prefix = f"[{record.levelname}]"
        if self.timestamps:
            stamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
            prefix = f"{prefix}[{stamp}]"
        message = f"{prefix} {record.getMessage()}"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


class JSONLinesFormatter(logging.Formatter):
    """Formatter for CI logs.

    Format: {"level":"INFO","ts":"2026-01-31T19:45:23+00:00","logger":"pagestack.site","msg":"..."}
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "level": record.levelname,
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "logger": record.name,
            "msg": record.getMessage(),
        }
        entry.update(getattr(record, "extra_data", {}))
        return json.dumps(entry)


class PageStackLogger(logging.Logger):
    """Logger that can attach fields for the JSON output."""

    def structured(self, level: int, msg: str, **kwargs: Any) -> None:
        """Log msg with extra fields; only the JSON formatter prints them.

        Args:
            level: Log level
            msg: Log message
            **kwargs: Fields merged into the JSON entry (e.g. written, failed)
        """
        self.log(level, msg, extra={"extra_data": kwargs}, stacklevel=2)


logging.setLoggerClass(PageStackLogger)


def get_logger(name: str = "pagestack") -> PageStackLogger:
    """Get a pagestack logger instance."""
    return logging.getLogger(name)  # type: ignore


def configure_from_cli(
    verbose: bool = False,
    quiet: bool = False,
    ci: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Configure the pagestack logger from the global CLI flags.

    Args:
        verbose: Timestamps and DEBUG output
        quiet: Warnings and errors only (wins over verbose for the level)
        ci: JSON lines output
        stream: Output stream (default: stderr)
    """
    if ci:
        formatter: logging.Formatter = JSONLinesFormatter()
    else:
        formatter = PageStackFormatter(timestamps=verbose)

    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logger = logging.getLogger("pagestack")
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(formatter)
    logger.addHandler(handler)
