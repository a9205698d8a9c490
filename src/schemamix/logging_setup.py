"""Standard library logging setup for the command line."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

_CLI_HANDLER: logging.Handler | None = None


def configure_logging(level: str = "INFO") -> None:
    """Send log records to the current stderr at `level`.

    Idempotent per-process: a repeated call only replaces the handler installed
    by the previous call.
    """
    global _CLI_HANDLER  # pylint: disable=global-statement

    root = logging.getLogger()
    if _CLI_HANDLER is not None:
        root.removeHandler(_CLI_HANDLER)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    _CLI_HANDLER = handler
