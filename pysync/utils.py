"""Utility functions and constants for pysync."""

import os
from typing import Optional

# =============================================================================
# Constants for file operations
# =============================================================================

# Buffer size used when streaming file contents (1 MB)
DEFAULT_COPY_BUFFER_SIZE: int = 1024 * 1024

# Jobs allowed in the worker pool queue per worker before the walker blocks
DEFAULT_QUEUE_DEPTH_PER_WORKER: int = 64


def default_worker_count() -> int:
    """Return the number of logical CPUs, falling back to 1."""
    return os.cpu_count() or 1


def resolve_worker_count(workers: Optional[int]) -> int:
    """Resolve a configured worker count.

    Args:
        workers: Configured worker count, 0 or None for the default

    Returns:
        Effective number of workers

    Examples:
        >>> resolve_worker_count(4)
        4
    """
    if not workers:
        return default_worker_count()
    return workers


# =============================================================================
# Formatting utilities
# =============================================================================


def format_size(size_bytes: int) -> str:
    """Format file size in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted size string (e.g., "1.5 MB", "256 B")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / 1024 / 1024:.1f} MB"
    else:
        return f"{size_bytes / 1024 / 1024 / 1024:.1f} GB"


def format_duration(seconds: float) -> str:
    """Format an elapsed time for display.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted duration (e.g., "250ms", "12.50s", "3m 05s")

    Examples:
        >>> format_duration(0.25)
        '250ms'
        >>> format_duration(12.5)
        '12.50s'
        >>> format_duration(185)
        '3m 05s'
    """
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    if seconds < 60:
        return f"{seconds:.2f}s"
    minutes, secs = divmod(int(seconds), 60)
    if minutes < 60:
        return f"{minutes}m {secs:02d}s"
    hours, minutes = divmod(minutes, 60)
    return f"{hours}h {minutes:02d}m {secs:02d}s"
