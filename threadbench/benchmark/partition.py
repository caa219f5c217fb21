#!/usr/bin/env python3
"""
Range partitioning and divisor summation for the CPU benchmark.

A candidate's divisor search interval ``[1, candidate]`` is split into
fixed-width partitions. Each partition is scanned independently and its
partial sum is added to the others to obtain the full divisor sum.
"""

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class Partition:
    """Closed sub-interval ``[lower, upper]`` of the divisor search range."""
    lower: int
    upper: int

    @property
    def width(self) -> int:
        return self.upper - self.lower + 1


def partition_range(candidate: int, range_width: int) -> List[Partition]:
    """
    Split ``[1, candidate]`` into contiguous partitions of at most ``range_width``.

    Args:
        candidate: Upper end of the interval (must be >= 1)
        range_width: Maximum width of one partition (must be >= 1)

    Returns:
        ``ceil(candidate / range_width)`` partitions in ascending order; the
        last one may be narrower than ``range_width``.
    """
    if candidate < 1:
        raise ValueError(f"candidate must be at least 1 (got {candidate})")
    if range_width < 1:
        raise ValueError(f"range_width must be at least 1 (got {range_width})")

    num_of_partitions = -(-candidate // range_width)
    return [
        Partition(
            lower=i * range_width + 1,
            upper=min(candidate, (i + 1) * range_width),
        )
        for i in range(num_of_partitions)
    ]


def sum_of_factors_in_range(lower: int, upper: int, number: int) -> int:
    """
    Sum every ``i`` in ``[lower, upper]`` that divides ``number``.

    ``number`` itself is counted when it lies in the range, so the sum over
    ``[1, number]`` is twice ``number`` exactly when ``number`` is perfect.
    """
    total = 0
    for i in range(lower, upper + 1):
        if number % i == 0:
            total += i
    return total
