"""Logging setup for trello_cli: diagnostics on stderr, optional log file."""

from __future__ import annotations

import logging
import re
import sys

LOGGER_NAME = "trello_cli"

CONSOLE_FORMAT = "%(levelname)s: %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Trello authenticates with ?key=...&token=... on every request URL
_CREDENTIAL_PARAM = re.compile(r"\b(key|token)=[^&\s'\")]+", re.IGNORECASE)


class CredentialRedactingFilter(logging.Filter):
    """Mask ``key=`` and ``token=`` query values in formatted log messages."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = _CREDENTIAL_PARAM.sub(r"\1=***", message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def setup_logging(level: str = "WARNING", log_file: str | None = None) -> logging.Logger:
    """Configure the ``trello_cli`` logger.

    Card output goes to stdout; everything logged here goes to stderr so that
    piping ``trello-cli -c 12 -f title`` into another tool stays clean.

    Args:
        level: DEBUG, INFO, WARNING or ERROR (case-insensitive); unknown names
               fall back to WARNING
        log_file: Also append timestamped records to this file

    Returns:
        The configured logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    resolved = logging.getLevelName(level.upper())
    logger.setLevel(resolved if isinstance(resolved, int) else logging.WARNING)

    # main() may run more than once in a process (tests)
    logger.handlers.clear()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    handlers[0].setFormatter(logging.Formatter(CONSOLE_FORMAT))

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        handlers.append(file_handler)

    redactor = CredentialRedactingFilter()
    for handler in handlers:
        handler.addFilter(redactor)
        logger.addHandler(handler)

    logger.propagate = False
    return logger
