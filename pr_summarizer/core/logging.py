"""Logging setup for GitHub Actions runs.

Actions turns lines of the form ``::warning::message`` and ``::error::message``
into annotations on the workflow run. ``ActionsFormatter`` renders warning and
error records that way; everything else is printed as plain text.
"""

from __future__ import annotations

import logging
import sys


def escape_command_data(message: str) -> str:
    """Escapes a workflow command payload (``%``, CR and LF)."""

    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class ActionsFormatter(logging.Formatter):
    """Formats records as GitHub workflow commands by severity."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.exc_info and record.levelno >= logging.ERROR:
            message = message + "\n" + self.formatException(record.exc_info)
        if record.levelno >= logging.ERROR:
            return f"::error::{escape_command_data(message)}"
        if record.levelno >= logging.WARNING:
            return f"::warning::{escape_command_data(message)}"
        if record.levelno <= logging.DEBUG:
            return f"::debug::{escape_command_data(message)}"
        return message


def setup_logging(level: str = "INFO") -> None:
    """Installs a single stdout handler using ``ActionsFormatter``.

    Args:
        level: Root log level name.
    """

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.handlers = []

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ActionsFormatter())
    root_logger.addHandler(handler)

    # Request lines from the HTTP stack would otherwise interleave with ours.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
