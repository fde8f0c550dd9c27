"""Logging setup for command-line sessions.

Library modules log through ``logging.getLogger(__name__)``; this module
attaches handlers to the ``peakfit1d`` logger for a CLI run.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime
from pathlib import Path

from rich.logging import RichHandler

from peakfit1d.ui.console import console

LOGGER_NAME = "peakfit1d"

_logger: logging.Logger | None = None


class JSONFormatter(logging.Formatter):
    """One JSON object per log record."""

    def format(self, record: logging.LogRecord) -> str:
        log_record = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_record)


def setup_logging(
    log_file: Path | None = None,
    verbose: bool = False,
    level: int = logging.INFO,
) -> None:
    """Attach file and console handlers to the ``peakfit1d`` logger.

    Args:
        log_file: Log destination; ``.json`` files get one JSON record per line
        verbose: Also echo records to the rich console
        level: Minimum level of emitted records
    """
    global _logger

    if log_file is None and not verbose:
        _logger = None
        return

    _logger = logging.getLogger(LOGGER_NAME)
    _logger.setLevel(level)
    _logger.handlers.clear()

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="w")
        file_handler.setLevel(level)
        if log_file.suffix == ".json":
            file_handler.setFormatter(JSONFormatter())
        else:
            file_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s | %(levelname)-5s | %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
        _logger.addHandler(file_handler)

    if verbose:
        console_handler = RichHandler(
            console=console,
            show_time=False,
            show_path=False,
            markup=False,
        )
        console_handler.setLevel(level)
        _logger.addHandler(console_handler)

    from peakfit1d import __version__

    _logger.info("peakfit1d v%s", __version__)
    _logger.info("Command: %s", " ".join(sys.argv))
    _logger.info("Working directory: %s", Path.cwd())


def log(message: str, level: str = "info") -> None:
    """Log a message if logging is enabled."""
    if _logger is None:
        return
    _logger.log(logging.getLevelName(level.upper()), message)


def log_section(title: str) -> None:
    """Log a section header."""
    if _logger is None:
        return
    _logger.info("=== %s ===", title.upper())


def log_dict(data: dict[str, object], indent: str = "  ") -> None:
    """Log a dictionary as key-value pairs."""
    if _logger is None:
        return
    for key, value in data.items():
        _logger.info("%s- %s: %s", indent, key, value)


def close_logging() -> None:
    """Detach and close all handlers."""
    global _logger

    if _logger is None:
        return
    _logger.info("Session completed")
    for handler in _logger.handlers[:]:
        handler.close()
        _logger.removeHandler(handler)
    _logger = None


__all__ = [
    "JSONFormatter",
    "close_logging",
    "log",
    "log_dict",
    "log_section",
    "setup_logging",
]
