"""Sync engine for pysync - one-way directory synchronization."""

from .comparator import CopyDecision, FileComparator
from .config import SyncConfig
from .deletion import DeletionPropagator, DeletionStats
from .engine import SyncEngine, SyncResult, SyncStats
from .ignore import IGNORE_FILE_NAME, IgnoreSet, load_ignore_file
from .operations import SyncOperations
from .pool import WorkerPool
from .scanner import (
    ContinueOnErrorPolicy,
    DirectoryWalker,
    EntryKind,
    PathEntry,
    TraversalPolicy,
    WalkResult,
)

__all__ = [
    "SyncEngine",
    "SyncConfig",
    "SyncResult",
    "SyncStats",
    "SyncOperations",
    "FileComparator",
    "CopyDecision",
    "DirectoryWalker",
    "PathEntry",
    "EntryKind",
    "WalkResult",
    "TraversalPolicy",
    "ContinueOnErrorPolicy",
    "WorkerPool",
    "DeletionPropagator",
    "DeletionStats",
    "IgnoreSet",
    "IGNORE_FILE_NAME",
    "load_ignore_file",
]
