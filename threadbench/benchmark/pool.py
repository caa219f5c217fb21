#!/usr/bin/env python3
"""
Bounded worker pool used by every benchmark phase.

A pool is created for one (thread count, phase) pair, receives all units of
work for that phase, and is shut down and awaited before the next phase
starts. Waiting is bounded; a pool that does not drain in time is abandoned.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Any, Callable, Optional, Set

from threadbench.core.errors import PoolTimeoutError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_SHUTDOWN_TIMEOUT = 5 * 60.0  # seconds


class WorkerPool:
    """Fixed-size thread pool with graceful, time-bounded shutdown."""

    def __init__(
        self,
        num_of_threads: int,
        shutdown_timeout: float = DEFAULT_SHUTDOWN_TIMEOUT,
        name: str = "bench",
    ):
        """
        Args:
            num_of_threads: Number of worker threads (must be >= 1)
            shutdown_timeout: Seconds to wait for queued work on shutdown
            name: Prefix for worker thread names
        """
        if num_of_threads < 1:
            raise ValidationError(
                "Number of threads must be at least one (1).",
                field="num_of_threads",
                value=num_of_threads,
            )
        self.num_of_threads = num_of_threads
        self.shutdown_timeout = shutdown_timeout
        self.name = name
        self._executor = ThreadPoolExecutor(
            max_workers=num_of_threads, thread_name_prefix=name
        )
        self._lock = threading.Lock()
        self._pending: Set[Future] = set()
        self._closed = False

    @property
    def pending(self) -> int:
        """Number of submitted units that have not finished yet."""
        with self._lock:
            return len(self._pending)

    def submit(self, fn: Callable[..., Any], *args, **kwargs) -> Future:
        """Queue a unit of work and return its future."""
        future = self._executor.submit(fn, *args, **kwargs)
        with self._lock:
            self._pending.add(future)
        future.add_done_callback(self._discard)
        return future

    def execute(self, fn: Callable[..., Any], *args, **kwargs) -> None:
        """Queue a unit of work whose result is not collected; failures are logged."""
        future = self.submit(fn, *args, **kwargs)
        future.add_done_callback(_log_failure)

    def _discard(self, future: Future) -> None:
        with self._lock:
            self._pending.discard(future)

    def shutdown_and_wait(self, timeout: Optional[float] = None) -> None:
        """
        Stop accepting work and wait for queued and running units to finish.

        Args:
            timeout: Seconds to wait; defaults to ``shutdown_timeout``

        Raises:
            PoolTimeoutError: If units are still unfinished when the wait ends.
                Queued units that have not started are cancelled.
        """
        if timeout is None:
            timeout = self.shutdown_timeout
        self._closed = True
        self._executor.shutdown(wait=False)

        with self._lock:
            outstanding = list(self._pending)
        _, not_done = wait(outstanding, timeout=timeout)

        if not_done:
            # counted before cancelling; cancelled futures report done()
            pending = len(not_done)
            self._executor.shutdown(wait=False, cancel_futures=True)
            raise PoolTimeoutError(
                f"Worker pool did not terminate within {timeout:g}s "
                f"({pending} unit(s) of work unfinished)",
                timeout=timeout,
                pending=pending,
            )

        self._executor.shutdown(wait=True)
        logger.debug(f"Worker pool '{self.name}' with {self.num_of_threads} thread(s) terminated")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            if not self._closed:
                self.shutdown_and_wait()
        else:
            self._executor.shutdown(wait=False, cancel_futures=True)
        return False


def _log_failure(future: Future) -> None:
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        logger.error(f"Unit of work failed: {exc!r}")
