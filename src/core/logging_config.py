"""Logging setup for the client.

Modules log through `logging.getLogger(__name__)`; this installs the handlers
once, at CLI start-up. Console output goes through Rich so log lines do not
tear the rendered page.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGERS = ("core", "adapters", "cli")


def setup_logging(
    level: str = "WARNING",
    log_file: Path | str | None = None,
    console: Console | None = None,
) -> logging.Logger:
    """Configure the package loggers.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional file that receives the same records.
        console: Console for the Rich handler (stderr by default).

    Returns:
        The `cli` logger.
    """

    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    handlers: list[logging.Handler] = [
        RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
    ]
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s [%(levelname)s] %(name)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        handlers.append(file_handler)

    for name in ROOT_LOGGERS:
        logger = logging.getLogger(name)
        logger.setLevel(numeric_level)
        logger.handlers.clear()
        for handler in handlers:
            handler.setLevel(numeric_level)
            logger.addHandler(handler)
        logger.propagate = False

    return logging.getLogger("cli")
