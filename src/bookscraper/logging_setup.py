"""Logging configuration for bookscraper.

Everything logs under the ``bookscraper`` logger. The console handler
writes to stderr so scraped records and OPF documents printed on stdout
stay machine-readable.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "bookscraper"

FILE_FORMAT = "%(asctime)s | %(levelname)-5s | [%(name)s] %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_level(name: str | None, default: int = logging.WARNING) -> int:
    """Map a level name such as "debug" to its logging constant."""
    if not name:
        return default
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else default


def _console_handler(level: int, *, rich_console: bool) -> logging.Handler:
    handler: logging.Handler
    if rich_console:
        handler = RichHandler(
            console=Console(stderr=True),
            show_time=True,
            show_path=False,
            rich_tracebacks=True,
            markup=False,
        )
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    handler.setLevel(level)
    return handler


def _file_handler(log_file: Path | str) -> logging.Handler:
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATE_FORMAT))
    return handler


def setup_logging(
    log_level: str | None = "WARNING",
    *,
    log_file: Path | str | None = None,
    quiet: bool = False,
    rich_console: bool = True,
) -> logging.Logger:
    """
    Configure the package logger.

    Calling it again replaces the handlers of the previous call.

    Args:
        log_level: Console level name; unknown names fall back to WARNING
        log_file: Optional file receiving every record down to DEBUG
        quiet: Raise the console threshold to WARNING regardless of log_level
        rich_console: Use RichHandler instead of a plain stream handler

    Returns:
        The ``bookscraper`` logger
    """
    console_level = resolve_level(log_level)
    if quiet:
        console_level = max(console_level, logging.WARNING)

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.addHandler(_console_handler(console_level, rich_console=rich_console))
    if log_file:
        logger.addHandler(_file_handler(log_file))
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(console_level)

    logger.debug("Logging configured (console=%s, file=%s)", console_level, log_file)
    return logger
