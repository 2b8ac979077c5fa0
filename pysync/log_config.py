"""Logging setup for pysync.

Sync events are logged through standard library loggers with structured
fields passed via ``extra``::

    logger.info("Copying file", extra=event("COPY_FILE", "a/b.txt"))

The fields are rendered as ``key=value`` pairs after the message by
:class:`EventFormatter`.
"""

import logging
import sys
from typing import Any

PACKAGE_LOGGER = "pysync"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"

# Order in which structured fields are rendered
EVENT_FIELDS = ("action", "path", "destination")

CHECK_FILE = "CHECK_FILE"
SKIP_FILE = "SKIP_FILE"
COPY_FILE = "COPY_FILE"
COPY = "COPY"
IGNORE = "IGNORE"
CHECK_DIR = "CHECK_DIR"
DELETE = "DELETE"


def event(action: str, path: str, **fields: Any) -> dict[str, Any]:
    """Build the ``extra`` mapping for a sync event.

    Args:
        action: Event action (e.g. ``COPY_FILE``)
        path: Relative or absolute path the event refers to
        **fields: Additional fields such as ``destination``

    Returns:
        Dictionary suitable for the ``extra`` argument of a log call
    """
    data: dict[str, Any] = {"action": action, "path": path}
    data.update(fields)
    return data


class EventFormatter(logging.Formatter):
    """Appends structured event fields to the formatted message."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        parts = [
            f"{name}={getattr(record, name)}"
            for name in EVENT_FIELDS
            if getattr(record, name, None) is not None
        ]
        if not parts:
            return message
        return f"{message} {' '.join(parts)}"


def level_for(verbose: bool, dry_run: bool) -> int:
    """Pick the log level for the given flags.

    Verbose shows every event, dry-run shows the intended actions and
    otherwise only warnings and errors are reported.
    """
    if verbose:
        return logging.DEBUG
    if dry_run:
        return logging.INFO
    return logging.WARNING


def configure_logging(verbose: bool = False, dry_run: bool = False) -> logging.Logger:
    """Configure the ``pysync`` logger for command line use.

    Calling this again replaces the handler installed by a previous call.

    Args:
        verbose: Enable debug output
        dry_run: Enable info output so intended actions are visible

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if getattr(handler, "_pysync_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(EventFormatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    handler._pysync_handler = True  # type: ignore[attr-defined]

    logger.addHandler(handler)
    logger.setLevel(level_for(verbose, dry_run))
    return logger
