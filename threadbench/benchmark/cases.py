#!/usr/bin/env python3
"""
Benchmark cases: one case per thread count in the sweep.

A :class:`Case` starts with zero timings. Each phase time is recorded once
by the harness and the table is read afterwards to render the report.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Sequence

import psutil

from threadbench.core.errors import ValidationError


class Phase(str, Enum):
    """Timed phases of a case, in execution order."""
    CPU = "cpu"
    FILE_WRITE = "file_write"
    FILE_READ = "file_read"
    FILE_DELETE = "file_delete"

    @property
    def label(self) -> str:
        return {
            Phase.CPU: "CPU",
            Phase.FILE_WRITE: "File W",
            Phase.FILE_READ: "File R",
            Phase.FILE_DELETE: "File D",
        }[self]


FILE_PHASES = (Phase.FILE_WRITE, Phase.FILE_READ, Phase.FILE_DELETE)


@dataclass
class Case:
    """Timings of one benchmark run at a fixed thread count, in milliseconds."""
    number: int
    num_of_threads: int
    times_ms: Dict[Phase, float] = field(default_factory=lambda: {p: 0.0 for p in Phase})
    failures: Dict[Phase, str] = field(default_factory=dict)
    _recorded: set = field(default_factory=set, init=False, repr=False, compare=False)

    def record(self, phase: Phase, elapsed_ms: float, error: Optional[str] = None) -> None:
        """
        Store the elapsed time of a phase.

        Args:
            phase: The phase that finished
            elapsed_ms: Wall-clock duration of the phase
            error: Reason the phase was abandoned, if it was
        """
        if phase in self._recorded:
            raise ValueError(f"Phase {phase.value} already recorded for case {self.number}")
        self._recorded.add(phase)
        self.times_ms[phase] = elapsed_ms
        if error is not None:
            self.failures[phase] = error

    @property
    def cpu_ms(self) -> float:
        return self.times_ms[Phase.CPU]

    @property
    def file_write_ms(self) -> float:
        return self.times_ms[Phase.FILE_WRITE]

    @property
    def file_read_ms(self) -> float:
        return self.times_ms[Phase.FILE_READ]

    @property
    def file_delete_ms(self) -> float:
        return self.times_ms[Phase.FILE_DELETE]

    @property
    def total_ms(self) -> float:
        return sum(self.times_ms.values())

    @property
    def failed(self) -> bool:
        return bool(self.failures)

    @property
    def complete(self) -> bool:
        return len(self._recorded) == len(Phase)


class Cases:
    """Ordered table of cases built from a thread count sweep."""

    def __init__(self, num_of_threads: Sequence[int], num_of_processors: Optional[int] = None):
        """
        Args:
            num_of_threads: Thread count of each case, in run order
            num_of_processors: Logical CPU count of the host, used to mark
                the matching case in the report
        """
        values = list(num_of_threads)
        if not values:
            raise ValidationError("At least one thread count is required.", field="num_of_threads")
        for n in values:
            if n < 1:
                raise ValidationError(
                    "Number of threads must be at least one (1).", field="num_of_threads", value=n
                )
        self.num_of_processors = num_of_processors or psutil.cpu_count(logical=True) or 1
        self._cases = [Case(number=i, num_of_threads=n) for i, n in enumerate(values, 1)]

    @classmethod
    def single(cls, num_of_threads: int, num_of_processors: Optional[int] = None) -> "Cases":
        return cls([num_of_threads], num_of_processors)

    @classmethod
    def from_range(cls, lower: int, upper: int, num_of_processors: Optional[int] = None) -> "Cases":
        if upper < lower:
            raise ValidationError(
                f"Upper bound must be greater than lower bound (lower:{lower}, upper:{upper}).",
                field="range",
                value=f"{lower}-{upper}",
            )
        return cls(range(lower, upper + 1), num_of_processors)

    def num_of_threads(self) -> List[int]:
        return [case.num_of_threads for case in self._cases]

    @property
    def total_ms(self) -> float:
        return sum(case.total_ms for case in self._cases)

    @property
    def failed(self) -> bool:
        return any(case.failed for case in self._cases)

    def __iter__(self) -> Iterator[Case]:
        return iter(self._cases)

    def __len__(self) -> int:
        return len(self._cases)

    def __getitem__(self, index: int) -> Case:
        return self._cases[index]
