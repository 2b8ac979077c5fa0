"""Filesystem operations used by the sync engine."""

import logging
import os
import shutil
import time
from pathlib import Path
from typing import Optional

from ..log_config import COPY, DELETE, event
from ..utils import DEFAULT_COPY_BUFFER_SIZE
from .scanner import PathEntry


class SyncOperations:
    """Copy and delete operations with dry-run support.

    Failures are logged and reported through the return value; they are
    never raised, so one broken file cannot stop a run.
    """

    def __init__(
        self,
        buffer_size: int = DEFAULT_COPY_BUFFER_SIZE,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize sync operations.

        Args:
            buffer_size: Buffer size for streaming file contents
            logger: Logger for operation events (defaults to the module logger)
        """
        self.buffer_size = buffer_size
        self.logger = logger or logging.getLogger(__name__)

    def copy_file(self, entry: PathEntry, dest_path: Path, dry_run: bool = False) -> bool:
        """Copy a source file to the destination.

        Missing parent directories are created. After the contents are
        written, the source modification time and permission bits are
        applied on a best-effort basis.

        Args:
            entry: Source file entry (metadata captured during the walk)
            dest_path: Destination file path
            dry_run: Only log the intended copy

        Returns:
            True if the contents were copied (or would be in dry-run mode)
        """
        extra = event(COPY, entry.relative_path)

        if dry_run:
            self.logger.info("DRY_RUN: Would copy file", extra=extra)
            return True

        try:
            dest_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            self.logger.error(
                f"Failed to create directories: {e}", extra=event(COPY, str(dest_path))
            )
            return False

        try:
            src = open(entry.path, "rb")
        except OSError as e:
            self.logger.error(
                f"Error opening source file: {e}", extra=event(COPY, str(entry.path))
            )
            return False

        with src:
            try:
                dst = open(dest_path, "wb")
            except OSError as e:
                self.logger.error(
                    f"Error creating destination file: {e}",
                    extra=event(COPY, str(dest_path)),
                )
                return False

            with dst:
                try:
                    shutil.copyfileobj(src, dst, self.buffer_size)
                    dst.flush()
                    os.fsync(dst.fileno())
                except OSError as e:
                    self.logger.error(
                        f"Error copying file contents: {e}",
                        extra=event(COPY, str(dest_path)),
                    )
                    return False

        self._preserve_metadata(entry, dest_path)
        self.logger.info("File copied successfully", extra=extra)
        return True

    def _preserve_metadata(self, entry: PathEntry, dest_path: Path) -> None:
        try:
            os.utime(dest_path, ns=(time.time_ns(), entry.mtime_ns))
        except OSError as e:
            self.logger.warning(
                f"Error preserving modification time: {e}",
                extra=event(COPY, str(dest_path)),
            )

        try:
            os.chmod(dest_path, entry.permissions)
        except OSError as e:
            self.logger.warning(
                f"Error setting file permissions: {e}",
                extra=event(COPY, str(dest_path)),
            )

    def delete_path(
        self, path: Path, relative_path: str, is_dir: bool, dry_run: bool = False
    ) -> bool:
        """Delete a destination file or directory tree.

        A target that has already disappeared counts as deleted.

        Args:
            path: Absolute path to delete
            relative_path: Path relative to the destination root (for logging)
            is_dir: Whether the path is a directory
            dry_run: Only log the intended deletion

        Returns:
            True if the path is gone (or would be in dry-run mode)
        """
        extra = event(DELETE, relative_path)

        if dry_run:
            self.logger.info("DRY_RUN: Would delete", extra=extra)
            return True

        try:
            if is_dir:
                shutil.rmtree(path)
            else:
                os.unlink(path)
        except FileNotFoundError:
            self.logger.debug("Already deleted", extra=extra)
            return True
        except OSError as e:
            self.logger.error(f"Error deleting: {e}", extra=event(DELETE, str(path)))
            return False

        self.logger.info("Successfully deleted", extra=extra)
        return True
