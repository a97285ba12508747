"""Structured logging for the numinspect CLI.

Diagnostics go to stderr so stdout carries nothing but the report. With
``--log-file`` every record, down to DEBUG, is also appended as one JSON
object per line. The inspection core never logs; only the CLI does.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any

CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with the record's structured fields inlined."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": record.created,
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        entry.update(getattr(record, "fields", {}))
        return json.dumps(entry, default=str)


def _file_handler(log_path: Path) -> logging.Handler:
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(JSONFormatter())
    return handler


def setup_logging(log_path: Path | None = None, level: int = logging.WARNING) -> None:
    """Route log records to stderr and, optionally, a JSON lines file.

    Args:
        log_path: JSON lines file; it records DEBUG and up regardless of ``level``
        level: Threshold for the stderr handler
    """
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root.setLevel(level)

    if log_path is not None:
        root.addHandler(_file_handler(log_path))
        root.setLevel(logging.DEBUG)


class StructuredLogger:
    """Logger whose records carry a dict of fields for the JSON sink."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def debug(self, msg: str, fields: dict[str, Any] | None = None) -> None:
        self._log(logging.DEBUG, msg, fields)

    def info(self, msg: str, fields: dict[str, Any] | None = None) -> None:
        self._log(logging.INFO, msg, fields)

    def _log(self, level: int, msg: str, fields: dict[str, Any] | None) -> None:
        if self.logger.isEnabledFor(level):
            self.logger.log(level, msg, extra={"fields": fields or {}})


def get_logger(name: str) -> StructuredLogger:
    return StructuredLogger(logging.getLogger(name))


__all__ = [
    "setup_logging",
    "get_logger",
    "StructuredLogger",
    "JSONFormatter",
]
