"""Logging configuration for the task tracker.

The package logs under the ``task_tracker`` logger. It stays silent until
the application (the CLI, or your own code) configures it.

Example:
    >>> import logging
    >>> logging.getLogger("task_tracker").setLevel(logging.DEBUG)

"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

# Create library logger
logger = logging.getLogger("task_tracker")

# Set default level to WARNING to avoid noise
logger.setLevel(logging.WARNING)

# Add a null handler to prevent "No handler found" warnings
logger.addHandler(logging.NullHandler())


def configure_logging(
    level: int = logging.INFO,
    format_string: str | None = None,
    stream: TextIO | None = None,
) -> logging.Handler:
    """Attach a stream handler to the package logger.

    Calling it again replaces the handler installed by the previous call
    rather than stacking a second one.

    Args:
        level: Logging level (e.g., logging.DEBUG, logging.INFO).
        format_string: Custom format string for log messages.
        stream: Output stream (defaults to sys.stderr).

    Returns:
        The installed handler.

    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    if stream is None:
        stream = sys.stderr

    for existing in list(logger.handlers):
        if getattr(existing, "_task_tracker_handler", False):
            logger.removeHandler(existing)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(format_string))
    handler._task_tracker_handler = True  # type: ignore[attr-defined]

    logger.addHandler(handler)
    logger.setLevel(level)

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
    logging.getLogger("httpcore").setLevel(max(level, logging.WARNING))
    return handler
