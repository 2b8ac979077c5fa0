"""Core sync engine for executing one-way synchronization runs."""

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Optional

from ..exceptions import TraversalError
from ..log_config import CHECK_DIR, CHECK_FILE, COPY_FILE, SKIP_FILE, event
from .comparator import CopyDecision, FileComparator
from .config import SyncConfig
from .deletion import DeletionPropagator
from .ignore import IgnoreSet, load_ignore_file
from .operations import SyncOperations
from .pool import WorkerPool
from .scanner import ContinueOnErrorPolicy, DirectoryWalker, PathEntry, TraversalPolicy


@dataclass
class SyncStats:
    """Counters for a sync run, safe to update from worker threads."""

    files_checked: int = 0
    files_copied: int = 0
    files_up_to_date: int = 0
    files_failed: int = 0
    bytes_copied: int = 0
    directories: int = 0
    walk_errors: int = 0
    deleted: int = 0
    delete_failed: int = 0
    _lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )

    def increment(self, name: str, amount: int = 1) -> None:
        with self._lock:
            setattr(self, name, getattr(self, name) + amount)

    def to_dict(self) -> dict:
        """Convert stats to a dictionary for JSON serialization."""
        return {
            "files_checked": self.files_checked,
            "files_copied": self.files_copied,
            "files_up_to_date": self.files_up_to_date,
            "files_failed": self.files_failed,
            "bytes_copied": self.bytes_copied,
            "directories": self.directories,
            "walk_errors": self.walk_errors,
            "deleted": self.deleted,
            "delete_failed": self.delete_failed,
        }


@dataclass
class SyncResult:
    """Outcome of a successful sync run.

    Per-file failures are counted in ``stats`` and do not fail the run. A
    run that cannot proceed at all raises a PysyncError instead.
    """

    stats: SyncStats
    elapsed: float
    dry_run: bool = False

    def to_dict(self) -> dict:
        data = self.stats.to_dict()
        data["elapsed_seconds"] = round(self.elapsed, 3)
        data["dry_run"] = self.dry_run
        return data


class SyncEngine:
    """Orchestrates a one-way sync of a destination tree to a source tree.

    A single thread walks the source, records every yielded path and feeds
    files to a worker pool that classifies and copies them. Deletion
    propagation only starts after the pool has drained.

    Examples:
        >>> engine = SyncEngine()
        >>> result = engine.run(SyncConfig(Path("/src"), Path("/dst"), delete=True))
        >>> print(f"Copied {result.stats.files_copied} file(s)")
    """

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        policy: Optional[TraversalPolicy] = None,
        queue_capacity: Optional[int] = None,
    ):
        """Initialize sync engine.

        Args:
            logger: Logger passed to every component (defaults to module loggers)
            policy: Decides whether the source walk continues after an error
            queue_capacity: Maximum number of queued copy jobs
        """
        self.logger = logger or logging.getLogger(__name__)
        self._component_logger = logger
        self.policy = policy or ContinueOnErrorPolicy()
        self.queue_capacity = queue_capacity
        self.comparator = FileComparator()
        self.operations = SyncOperations(logger=self._component_logger)

    def run(self, config: SyncConfig) -> SyncResult:
        """Run one synchronization pass.

        Args:
            config: Sync configuration

        Returns:
            SyncResult with statistics and elapsed time

        Raises:
            SyncConfigError: If the configuration is invalid
            TraversalError: If the source (or destination, when deleting)
                root cannot be walked
        """
        start_time = time.monotonic()
        source_exists = config.source.is_dir()
        ignore_set = (
            load_ignore_file(config.source, logger=self._component_logger)
            if source_exists
            else IgnoreSet.empty()
        )
        config.validate(ignore_set)

        if not source_exists:
            raise TraversalError(
                f"Source directory does not exist or is not a directory: "
                f"{config.source}",
                path=str(config.source),
            )

        stats = SyncStats()
        walker = DirectoryWalker(ignore_set, logger=self._component_logger)

        self.logger.debug(
            f"Starting sync {config.source} -> {config.destination} "
            f"with {config.workers} worker(s)"
        )

        # Written only by this thread; read after the pool has drained
        seen: set[str] = set()
        failure: Optional[TraversalError] = None

        pool: WorkerPool[PathEntry] = WorkerPool(
            lambda entry: self._process_file(entry, config, stats),
            workers=config.workers,
            capacity=self.queue_capacity,
            logger=self._component_logger,
        )
        with pool:
            for result in walker.walk(config.source):
                if result.error is not None:
                    stats.increment("walk_errors")
                    self.logger.error(
                        f"Error walking source directory: {result.error}",
                        extra={"path": result.relative_path or str(config.source)},
                    )
                    if not self.policy.should_continue(result):
                        failure = TraversalError(
                            f"Cannot walk source directory {config.source}: "
                            f"{result.error}",
                            path=str(config.source),
                            cause=result.error,
                        )
                        break
                    continue

                entry = result.entry
                if entry is None:
                    continue
                seen.add(entry.relative_path)

                if entry.is_dir:
                    stats.increment("directories")
                    self.logger.debug(
                        "Directory check started",
                        extra=event(CHECK_DIR, entry.relative_path),
                    )
                    continue

                pool.submit(entry)

        stats.increment("files_failed", pool.failures)

        if failure is not None:
            raise failure

        if config.delete:
            propagator = DeletionPropagator(
                self.operations, logger=self._component_logger
            )
            deletion = propagator.propagate(
                config.destination, seen, dry_run=config.dry_run
            )
            stats.increment("deleted", deletion.deleted)
            stats.increment("delete_failed", deletion.failed)

        elapsed = time.monotonic() - start_time
        self.logger.debug(f"Sync finished in {elapsed:.2f}s")
        return SyncResult(stats=stats, elapsed=elapsed, dry_run=config.dry_run)

    def _process_file(self, entry: PathEntry, config: SyncConfig, stats: SyncStats) -> None:
        """Classify one source file and copy it if needed (worker thread)."""
        relative_path = entry.relative_path
        dest_path = config.destination / relative_path
        stats.increment("files_checked")

        self.logger.debug("File check started", extra=event(CHECK_FILE, relative_path))

        try:
            decision = self.comparator.classify(entry, dest_path)
        except OSError as e:
            stats.increment("files_failed")
            self.logger.warning(
                f"Could not stat destination file: {e}", extra={"path": str(dest_path)}
            )
            return

        if decision is CopyDecision.UP_TO_DATE:
            stats.increment("files_up_to_date")
            self.logger.debug(
                "File is up-to-date, skipping", extra=event(SKIP_FILE, relative_path)
            )
            return

        self.logger.info(
            "Copying file",
            extra=event(COPY_FILE, relative_path, destination=str(dest_path)),
        )
        if self.operations.copy_file(entry, dest_path, dry_run=config.dry_run):
            stats.increment("files_copied")
            stats.increment("bytes_copied", entry.size)
        else:
            stats.increment("files_failed")
