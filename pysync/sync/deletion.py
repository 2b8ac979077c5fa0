"""Removal of destination entries that no longer exist in the source."""

import logging
from collections.abc import Container
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..exceptions import TraversalError
from .operations import SyncOperations
from .scanner import DirectoryWalker


@dataclass
class DeletionStats:
    """Counters for one deletion pass."""

    deleted: int = 0
    failed: int = 0


def _is_within(relative_path: str, directory: str) -> bool:
    return relative_path == directory or relative_path.startswith(directory + "/")


class DeletionPropagator:
    """Deletes destination entries whose relative path was not seen in the source.

    Must only run after the copy pass has fully drained, otherwise a file
    could be deleted while it is still being copied.
    """

    def __init__(
        self,
        operations: Optional[SyncOperations] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.logger = logger or logging.getLogger(__name__)
        self.operations = operations or SyncOperations(logger=self.logger)

    def propagate(
        self, dest_root: Path, seen: Container[str], dry_run: bool = False
    ) -> DeletionStats:
        """Walk the destination and delete everything not in ``seen``.

        A directory that is deleted (or would be, in dry-run mode) counts as
        one deletion; its contents are not visited. If deleting a directory
        fails, its contents are still walked so that whatever can be removed
        is removed.

        Args:
            dest_root: Destination root (never deleted itself)
            seen: Relative paths observed during the source walk
            dry_run: Only log intended deletions

        Returns:
            DeletionStats for this pass

        Raises:
            TraversalError: If the destination root exists but cannot be read
        """
        self.logger.info("START: Propagating deletions in destination")
        stats = DeletionStats()
        # Links are deleted as links, so dangling ones are removed as well
        walker = DirectoryWalker(follow_symlinks=False, logger=self.logger)
        # Last directory removed as a whole; the walk is depth-first, so
        # everything under it follows it directly
        pruned: Optional[str] = None

        for result in walker.walk(dest_root):
            if pruned is not None:
                if _is_within(result.relative_path, pruned):
                    continue
                pruned = None

            if result.error is not None:
                if isinstance(result.error, FileNotFoundError):
                    # Root not created yet, or subtree removed with its parent
                    continue
                if result.is_root:
                    raise TraversalError(
                        f"Cannot read destination directory {dest_root}: {result.error}",
                        path=str(dest_root),
                        cause=result.error,
                    )
                self.logger.error(
                    f"Error walking destination directory: {result.error}",
                    extra={"path": result.relative_path},
                )
                continue

            entry = result.entry
            if entry is None or entry.relative_path in seen:
                continue

            if self.operations.delete_path(
                entry.path, entry.relative_path, entry.is_dir, dry_run=dry_run
            ):
                stats.deleted += 1
                if entry.is_dir:
                    pruned = entry.relative_path
            else:
                stats.failed += 1

        return stats
