"""PySync - fast, concurrent one-way directory synchronization."""

from .exceptions import PysyncError, SyncConfigError, TraversalError
from .sync import SyncConfig, SyncEngine, SyncResult
from .utils import format_duration, format_size

__version__ = "0.1.0"

__all__ = [
    "SyncEngine",
    "SyncConfig",
    "SyncResult",
    "PysyncError",
    "SyncConfigError",
    "TraversalError",
    "format_duration",
    "format_size",
]
