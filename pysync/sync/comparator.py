"""Change detection for sync operations."""

import os
from enum import Enum
from pathlib import Path
from typing import Optional

from .scanner import PathEntry


class CopyDecision(str, Enum):
    """Whether a source file has to be copied to the destination."""

    COPY_NEEDED = "copy_needed"
    """Destination is missing or differs from the source"""

    UP_TO_DATE = "up_to_date"
    """Destination already matches the source"""


class FileComparator:
    """Decides whether a destination file is up to date.

    A destination counts as up to date when it is at least as new as the
    source and has the same size. This is a metadata heuristic: a file
    rewritten with the same size within the filesystem's timestamp
    resolution is not detected.
    """

    def needs_copy(
        self, source: PathEntry, dest_stat: Optional[os.stat_result]
    ) -> bool:
        """Compare source metadata with the destination's stat result.

        Args:
            source: Source file entry
            dest_stat: Destination stat result, or None if it does not exist

        Returns:
            True if the source has to be copied
        """
        if dest_stat is None:
            return True
        return not (
            dest_stat.st_mtime_ns >= source.mtime_ns
            and dest_stat.st_size == source.size
        )

    def classify(self, source: PathEntry, dest_path: Path) -> CopyDecision:
        """Stat the destination and classify the source file.

        Args:
            source: Source file entry
            dest_path: Corresponding destination path

        Returns:
            CopyDecision for this file

        Raises:
            OSError: If the destination exists but cannot be stat'ed
        """
        try:
            dest_stat: Optional[os.stat_result] = os.stat(dest_path)
        except (FileNotFoundError, NotADirectoryError):
            dest_stat = None

        if self.needs_copy(source, dest_stat):
            return CopyDecision.COPY_NEEDED
        return CopyDecision.UP_TO_DATE
