"""Directory traversal for sync operations."""

import logging
import os
import stat
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from ..log_config import IGNORE, event
from .ignore import IgnoreSet


class EntryKind(str, Enum):
    """Kind of a traversed filesystem entry."""

    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class PathEntry:
    """A file or directory discovered during a walk, with its metadata."""

    path: Path
    """Absolute path to the entry"""

    relative_path: str
    """Relative path (using forward slashes for cross-platform compatibility)"""

    kind: EntryKind
    """Whether the entry is a file or a directory"""

    size: int
    """Size in bytes"""

    mtime_ns: int
    """Last modification time in nanoseconds since the epoch"""

    mode: int
    """Full st_mode of the entry"""

    @classmethod
    def from_stat(
        cls, path: Path, relative_path: str, st: os.stat_result, is_dir: bool
    ) -> "PathEntry":
        """Create a PathEntry from an already obtained stat result."""
        return cls(
            path=path,
            relative_path=relative_path,
            kind=EntryKind.DIRECTORY if is_dir else EntryKind.FILE,
            size=st.st_size,
            mtime_ns=st.st_mtime_ns,
            mode=st.st_mode,
        )

    @classmethod
    def from_path(cls, path: Path, base_path: Path) -> "PathEntry":
        """Stat a path and create a PathEntry relative to base_path."""
        st = path.stat()
        return cls.from_stat(
            path,
            path.relative_to(base_path).as_posix(),
            st,
            stat.S_ISDIR(st.st_mode),
        )

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    @property
    def mtime(self) -> float:
        """Last modification time (Unix timestamp)."""
        return self.mtime_ns / 1e9

    @property
    def permissions(self) -> int:
        """Permission bits of the entry."""
        return stat.S_IMODE(self.mode)


@dataclass(frozen=True)
class WalkResult:
    """Outcome of visiting one path: either an entry or the error hit."""

    relative_path: str
    """Relative path of the visited entry ("" for the walk root)"""

    entry: Optional[PathEntry] = None
    error: Optional[OSError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def is_root(self) -> bool:
        return self.relative_path == ""


class TraversalPolicy:
    """Decides whether a walk goes on after an error result."""

    def should_continue(self, result: WalkResult) -> bool:
        raise NotImplementedError


class ContinueOnErrorPolicy(TraversalPolicy):
    """Skip unreadable entries and subtrees; stop only if the root fails."""

    def should_continue(self, result: WalkResult) -> bool:
        return not result.is_root


class DirectoryWalker:
    """Walks a directory tree depth-first in lexical order.

    Directories are yielded before their contents. Paths matched by the
    ignore set are never yielded, and an ignored directory prunes its whole
    subtree. Errors are yielded as results instead of being raised, so the
    consumer decides how to react to them.

    Examples:
        >>> walker = DirectoryWalker(IgnoreSet.from_lines(["*.tmp"]))
        >>> for result in walker.walk(Path("/data")):
        ...     if result.ok:
        ...         print(result.entry.relative_path)
    """

    def __init__(
        self,
        ignore_set: Optional[IgnoreSet] = None,
        follow_symlinks: bool = True,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize directory walker.

        Args:
            ignore_set: Patterns to exclude (nothing is excluded if omitted)
            follow_symlinks: Stat the target of non-directory symlinks; when
                False the link itself is reported
            logger: Logger for ignore events (defaults to the module logger)
        """
        self.ignore_set = ignore_set or IgnoreSet.empty()
        self.follow_symlinks = follow_symlinks
        self.logger = logger or logging.getLogger(__name__)

    def walk(self, root: Path) -> Iterator[WalkResult]:
        """Lazily walk ``root``; the root itself is never yielded as an entry.

        Args:
            root: Directory to walk

        Yields:
            WalkResult per visited entry or failed directory listing
        """
        yield from self._walk_dir(Path(root), "")

    def _walk_dir(self, directory: Path, relative_dir: str) -> Iterator[WalkResult]:
        try:
            with os.scandir(directory) as it:
                children = sorted(it, key=lambda d: d.name)
        except OSError as e:
            yield WalkResult(relative_path=relative_dir, error=e)
            return

        for child in children:
            relative_path = f"{relative_dir}/{child.name}" if relative_dir else child.name

            try:
                is_dir = child.is_dir(follow_symlinks=False)
            except OSError:
                is_dir = False

            if self.ignore_set.matches(relative_path, is_dir=is_dir):
                self.logger.debug(
                    "Path matched ignore rule, skipping",
                    extra=event(IGNORE, relative_path),
                )
                continue

            try:
                st = child.stat(follow_symlinks=self.follow_symlinks and not is_dir)
            except OSError as e:
                yield WalkResult(relative_path=relative_path, error=e)
                continue

            entry = PathEntry.from_stat(Path(child.path), relative_path, st, is_dir)
            yield WalkResult(relative_path=relative_path, entry=entry)

            if is_dir:
                yield from self._walk_dir(entry.path, relative_path)
