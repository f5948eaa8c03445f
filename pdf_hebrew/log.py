"""Logging setup for pdf-hebrew.

Every module logs through ``logging.getLogger(__name__)``; the CLI (or an
application) calls :func:`setup_logging` once to attach a rich handler to
the package logger.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "pdf_hebrew"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package logger or one of its children."""
    if not name or name == PACKAGE_LOGGER:
        return logging.getLogger(PACKAGE_LOGGER)
    if not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def setup_logging(level: str | int = "WARNING", console: Console | None = None) -> logging.Logger:
    """Attach a single RichHandler to the package logger.

    Calling this again replaces the previous handler instead of stacking a
    second one, so the CLI can reconfigure the level per invocation.

    Args:
        level: Level name ("DEBUG", "INFO", ...) or numeric level.
        console: Console to log to. Defaults to stderr.

    Returns:
        The configured package logger.
    """
    if isinstance(level, str):
        level = level.upper()

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if getattr(handler, "_pdf_hebrew_handler", False):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler._pdf_hebrew_handler = True  # type: ignore[attr-defined]
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger
