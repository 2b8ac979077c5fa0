"""Exceptions raised by pysync."""

from typing import Optional


class PysyncError(Exception):
    """Base exception for all pysync errors."""


class SyncConfigError(PysyncError):
    """Raised when a sync configuration is invalid.

    Configuration errors are detected before any traversal starts, so a run
    that raises this has not touched the filesystem.
    """


class TraversalError(PysyncError):
    """Raised when a root directory cannot be walked at all."""

    def __init__(
        self, message: str, path: str = "", cause: Optional[BaseException] = None
    ):
        super().__init__(message)
        self.path = path
        self.cause = cause
