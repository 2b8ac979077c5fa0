"""Configuration for a single synchronization run."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from ..exceptions import SyncConfigError
from ..utils import resolve_worker_count
from .ignore import IGNORE_FILE_NAME, IgnoreSet


def _is_subpath(child: Path, parent: Path) -> bool:
    try:
        child.relative_to(parent)
        return True
    except ValueError:
        return False


def _is_ignored(relative: Path, ignore_set: Optional[IgnoreSet]) -> bool:
    """Whether the walk prunes a directory or one of its parents."""
    if not ignore_set:
        return False
    parts = relative.parts
    return any(
        ignore_set.matches("/".join(parts[: i + 1]), is_dir=True)
        for i in range(len(parts))
    )


@dataclass(frozen=True)
class SyncConfig:
    """Settings for one one-way sync from ``source`` to ``destination``.

    A ``workers`` value of 0 (or None) resolves to the number of logical
    CPUs when the config is created.

    Examples:
        >>> config = SyncConfig(Path("/data/src"), Path("/backup/src"), workers=4)
        >>> config.workers
        4
    """

    source: Path
    """Root of the tree being mirrored from"""

    destination: Path
    """Root of the tree being mirrored to"""

    dry_run: bool = False
    """Log intended actions without touching the filesystem"""

    delete: bool = False
    """Delete destination entries that have no source counterpart"""

    verbose: bool = False
    """Report every per-file event"""

    workers: Optional[int] = 0
    """Number of concurrent copy workers"""

    def __post_init__(self) -> None:
        object.__setattr__(self, "source", Path(self.source))
        object.__setattr__(self, "destination", Path(self.destination))
        if self.workers is not None and self.workers < 0:
            raise SyncConfigError(
                f"Worker count must not be negative (got {self.workers})"
            )
        object.__setattr__(self, "workers", resolve_worker_count(self.workers))

    @classmethod
    def from_paths(
        cls,
        source: Union[str, Path],
        destination: Union[str, Path],
        **options: object,
    ) -> "SyncConfig":
        """Create a config from string or Path roots."""
        return cls(Path(source), Path(destination), **options)  # type: ignore[arg-type]

    def validate(self, ignore_set: Optional[IgnoreSet] = None) -> None:
        """Check the config before any traversal starts.

        A destination inside the source is accepted only when the ignore set
        excludes it (or one of its parent directories), since the walk would
        otherwise copy the destination into itself. A source inside the
        destination is accepted only without ``delete``, which would remove
        the source from under the walk.

        Args:
            ignore_set: Patterns loaded from the source root, if any

        Raises:
            SyncConfigError: If source and destination are the same directory
                or their nesting is unsafe for this run
        """
        source = self.source.resolve()
        destination = self.destination.resolve()

        if source == destination:
            raise SyncConfigError("Source and destination paths cannot be the same")
        if _is_subpath(destination, source) and not _is_ignored(
            destination.relative_to(source), ignore_set
        ):
            raise SyncConfigError(
                f"Destination {self.destination} is inside source {self.source} "
                f"and not excluded by {IGNORE_FILE_NAME}"
            )
        if self.delete and _is_subpath(source, destination):
            raise SyncConfigError(
                f"Source {self.source} is inside destination {self.destination}; "
                "refusing to delete extra files"
            )
