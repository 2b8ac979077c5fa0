"""Ignore-file support for sync operations.

A ``.gosyncignore`` file in the source root lists gitignore-style patterns
for paths that must not be synchronized::

    # build output
    build/
    *.tmp
    !keep.tmp

Ignoring is opt-in: without an ignore file nothing is ignored. A file that
cannot be read or compiled is reported and treated as empty, so a broken
ignore file never blocks synchronization.
"""

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Optional

from pathspec import GitIgnoreSpec

IGNORE_FILE_NAME = ".gosyncignore"


class IgnoreSet:
    """Compiled set of ignore patterns.

    Instances are never mutated after construction and can be shared by
    worker threads without locking.

    Examples:
        >>> ignore_set = IgnoreSet.from_lines(["build/", "*.log"])
        >>> ignore_set.matches("build", is_dir=True)
        True
        >>> ignore_set.matches("src/app.log")
        True
        >>> ignore_set.matches("src/app.py")
        False
    """

    def __init__(self, patterns: Iterable[str] = ()):
        self._patterns = tuple(patterns)
        self._spec: Optional[GitIgnoreSpec] = (
            GitIgnoreSpec.from_lines(self._patterns) if self._patterns else None
        )

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "IgnoreSet":
        """Compile patterns from ignore-file lines.

        Raises:
            ValueError: If a pattern is not valid gitignore syntax
        """
        return cls(line.rstrip("\r\n") for line in lines)

    @classmethod
    def empty(cls) -> "IgnoreSet":
        """Return a set that matches nothing."""
        return cls()

    @property
    def patterns(self) -> tuple[str, ...]:
        """Raw pattern lines in file order."""
        return self._patterns

    def __len__(self) -> int:
        return len(self._patterns)

    def __bool__(self) -> bool:
        return self._spec is not None

    def matches(self, relative_path: str, is_dir: bool = False) -> bool:
        """Check whether a root-relative path is ignored.

        Args:
            relative_path: Path relative to the source root (forward slashes)
            is_dir: Whether the path is a directory; directory-only patterns
                such as ``build/`` only match directories

        Returns:
            True if the path should be excluded
        """
        if self._spec is None or not relative_path:
            return False
        if is_dir and not relative_path.endswith("/"):
            relative_path += "/"
        return self._spec.match_file(relative_path)


def load_ignore_file(
    source_root: Path, logger: Optional[logging.Logger] = None
) -> IgnoreSet:
    """Load the ignore file from a source root.

    Args:
        source_root: Root of the source tree
        logger: Logger for load failures (defaults to the module logger)

    Returns:
        Compiled IgnoreSet, empty when the file is missing or unusable
    """
    log = logger or logging.getLogger(__name__)
    ignore_path = Path(source_root) / IGNORE_FILE_NAME

    if not ignore_path.exists():
        log.debug(f"No {IGNORE_FILE_NAME} found in {source_root}")
        return IgnoreSet.empty()

    try:
        with open(ignore_path, encoding="utf-8") as f:
            ignore_set = IgnoreSet.from_lines(f)
    except (OSError, UnicodeDecodeError, ValueError) as e:
        log.error(
            f"Error reading {IGNORE_FILE_NAME} file, ignoring nothing: {e}",
            extra={"path": str(ignore_path)},
        )
        return IgnoreSet.empty()

    log.debug(f"Loaded {len(ignore_set)} pattern line(s) from {ignore_path}")
    return ignore_set
