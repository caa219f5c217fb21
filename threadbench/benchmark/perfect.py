#!/usr/bin/env python3
"""
Perfect number checks used as the CPU-bound workload.

A number is perfect when the sum of all its divisors, itself included,
equals twice the number. Two interchangeable strategies are provided: a
sequential scan on the calling thread and a partitioned scan on a
:class:`~threadbench.benchmark.pool.WorkerPool`.
"""

import logging
import time
from abc import ABC, abstractmethod
from concurrent.futures import wait
from dataclasses import dataclass, field
from typing import List, Optional

from threadbench.benchmark.partition import partition_range, sum_of_factors_in_range
from threadbench.benchmark.pool import WorkerPool
from threadbench.core.errors import PoolTimeoutError

logger = logging.getLogger(__name__)

DEFAULT_RANGE_WIDTH = 1_000_000


class Perfectum(ABC):
    """Strategy interface for perfect number checks."""

    @abstractmethod
    def is_perfect(self, candidate: int) -> bool:
        """Return True if ``candidate`` is a perfect number."""


class IsPerfect(Perfectum):
    """Scan the whole divisor range in a single pass on the calling thread."""

    def is_perfect(self, candidate: int) -> bool:
        return 2 * candidate == sum_of_factors_in_range(1, candidate, candidate)


class IsPerfectConcurrent(Perfectum):
    """
    Split the divisor range into partitions and scan them on a worker pool.

    Partial sums are collected from every partition before the test is
    applied. A partition whose unit of work fails contributes zero.
    """

    def __init__(self, pool: WorkerPool, range_width: int = DEFAULT_RANGE_WIDTH,
                 timeout: Optional[float] = None):
        """
        Args:
            pool: Worker pool receiving one unit of work per partition
            range_width: Maximum width of one partition
            timeout: Seconds every check made by this checker may take in
                total, counted from construction; None waits without limit
        """
        self._pool = pool
        self._range_width = range_width
        self._timeout = timeout
        self._deadline = None if timeout is None else time.monotonic() + timeout

    def is_perfect(self, candidate: int) -> bool:
        futures = [
            self._pool.submit(sum_of_factors_in_range, p.lower, p.upper, candidate)
            for p in partition_range(candidate, self._range_width)
        ]
        remaining = None
        if self._deadline is not None:
            remaining = max(0.0, self._deadline - time.monotonic())
        _, not_done = wait(futures, timeout=remaining)
        if not_done:
            for future in not_done:
                future.cancel()
            raise PoolTimeoutError(
                f"Divisor sum for {candidate} did not finish within {self._timeout:g}s "
                f"({len(not_done)} partition(s) unfinished)",
                timeout=self._timeout,
                pending=len(not_done),
            )

        total = 0
        for future in futures:
            try:
                total += future.result()
            except Exception as e:
                logger.error(f"Divisor sum for {candidate} failed: {e!r}; partition counted as zero")
        return 2 * candidate == total


def make_checker(num_of_threads: int, pool: Optional[WorkerPool] = None,
                 range_width: int = DEFAULT_RANGE_WIDTH,
                 timeout: Optional[float] = None) -> Perfectum:
    """
    Pick the strategy for a thread count.

    A single thread always uses the sequential strategy and needs no pool;
    ``timeout`` only bounds the pooled strategy.
    """
    if num_of_threads == 1:
        return IsPerfect()
    if pool is None:
        raise ValueError("A worker pool is required for more than one thread")
    return IsPerfectConcurrent(pool, range_width, timeout)


@dataclass
class CpuResult:
    """Outcome of one CPU scan."""
    elapsed_ms: float
    perfect_numbers: List[int] = field(default_factory=list)


def count_range(lower: int, upper: int, checker: Perfectum) -> CpuResult:
    """Check every candidate in ``[lower, upper]`` and time the whole scan."""
    found = []
    start = time.perf_counter()
    for candidate in range(lower, upper + 1):
        if checker.is_perfect(candidate):
            found.append(candidate)
    elapsed_ms = (time.perf_counter() - start) * 1000.0
    return CpuResult(elapsed_ms=elapsed_ms, perfect_numbers=found)
