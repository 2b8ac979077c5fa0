"""Fixed-size worker pool for file jobs."""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Generic, Optional, TypeVar

from ..utils import DEFAULT_QUEUE_DEPTH_PER_WORKER

T = TypeVar("T")


class WorkerPool(Generic[T]):
    """Runs a handler for each submitted job on N worker threads.

    The queue is bounded: at most ``capacity`` jobs may be queued or in
    flight at once, and ``submit`` blocks the producer until a slot frees
    up. ``close`` is the drain barrier; it returns only after every
    submitted job has finished.

    Examples:
        >>> with WorkerPool(print, workers=4) as pool:
        ...     for job in ["a", "b"]:
        ...         pool.submit(job)
    """

    def __init__(
        self,
        handler: Callable[[T], None],
        workers: int,
        capacity: Optional[int] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize and start the worker pool.

        Args:
            handler: Function called once per job on a worker thread
            workers: Number of worker threads
            capacity: Maximum queued plus in-flight jobs
                (default: workers * DEFAULT_QUEUE_DEPTH_PER_WORKER)
            logger: Logger for handler failures (defaults to the module logger)
        """
        if workers < 1:
            raise ValueError(f"Worker count must be at least 1 (got {workers})")

        self.handler = handler
        self.workers = workers
        self.capacity = capacity or workers * DEFAULT_QUEUE_DEPTH_PER_WORKER
        self.logger = logger or logging.getLogger(__name__)

        self._slots = threading.BoundedSemaphore(self.capacity)
        self._lock = threading.Lock()
        self._closed = False
        self.submitted = 0
        self.failures = 0

        self._executor = ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="pysync-worker"
        )

    def __enter__(self) -> "WorkerPool[T]":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def submit(self, job: T) -> None:
        """Queue a job, blocking while the queue is full.

        Raises:
            RuntimeError: If the pool has been closed
        """
        if self._closed:
            raise RuntimeError("Cannot submit jobs to a closed worker pool")

        self._slots.acquire()
        try:
            future: Future = self._executor.submit(self._run, job)
        except BaseException:
            self._slots.release()
            raise
        future.add_done_callback(lambda _: self._slots.release())
        self.submitted += 1

    def _run(self, job: T) -> None:
        try:
            self.handler(job)
        except Exception:
            with self._lock:
                self.failures += 1
            self.logger.exception(f"Unexpected error while processing job {job!r}")

    def close(self) -> None:
        """Stop accepting jobs and wait until all queued jobs are done."""
        self._closed = True
        self._executor.shutdown(wait=True)
