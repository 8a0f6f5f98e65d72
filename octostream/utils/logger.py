"""Logging setup for octostream.

The library logs under the ``octostream`` logger and stays silent unless
the application configures logging.

Example:
    >>> import logging
    >>> logging.getLogger("octostream").setLevel(logging.DEBUG)

"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

logger = logging.getLogger("octostream")
logger.setLevel(logging.WARNING)
logger.addHandler(logging.NullHandler())


def configure_logging(
    level: int = logging.INFO,
    format_string: str | None = None,
    stream: TextIO | None = None,
) -> logging.Handler:
    """Attach a stream handler to the ``octostream`` logger.

    Meant for scripts and the CLI; applications should configure logging
    through their own setup instead.

    Args:
        level: Level for the package logger.
        format_string: Log record format.
        stream: Output stream, stderr by default.

    Returns:
        The handler that was added, so callers can remove it again.

    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(format_string))

    logger.addHandler(handler)
    logger.setLevel(level)
    return handler
