#!/usr/bin/env python3
"""
Thread-count sweep harness.

For every case in the sweep the harness runs the CPU phase followed by the
file write, read and delete phases. Each phase runs on its own worker pool
and the pool is fully drained before the next phase starts; cases never
overlap.
"""

import logging
from contextlib import nullcontext
from typing import Callable, Optional

from threadbench.benchmark.cases import FILE_PHASES, Case, Cases, Phase
from threadbench.benchmark.config import CpuWorkloadConfig, FileWorkloadConfig
from threadbench.benchmark.core import BenchmarkTimer
from threadbench.benchmark.files import FileWorkloadRunner
from threadbench.benchmark.perfect import count_range, make_checker
from threadbench.benchmark.pool import DEFAULT_SHUTDOWN_TIMEOUT, WorkerPool
from threadbench.core.errors import PoolTimeoutError

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int], None]


class SweepHarness:
    """Runs every benchmark phase once per thread count and fills the case table."""

    def __init__(
        self,
        cases: Cases,
        cpu_config: Optional[CpuWorkloadConfig] = None,
        file_config: Optional[FileWorkloadConfig] = None,
        pool_timeout: float = DEFAULT_SHUTDOWN_TIMEOUT,
        progress: Optional[ProgressCallback] = None,
    ):
        """
        Args:
            cases: Case table, one case per thread count
            cpu_config: Perfect number scan parameters
            file_config: File workload parameters
            pool_timeout: Seconds a pool may take to drain before its phase is abandoned
            progress: Optional callback receiving (label, case number) at each phase start
        """
        self.cases = cases
        self.cpu_config = cpu_config or CpuWorkloadConfig()
        self.file_config = file_config or FileWorkloadConfig()
        self.pool_timeout = pool_timeout
        self.progress = progress
        self.runner = FileWorkloadRunner(self.file_config)

    def run(self) -> Cases:
        """Run all cases in order and return the completed table."""
        logger.info(
            f"Running {len(self.cases)} case(s) with thread counts {self.cases.num_of_threads()}"
        )
        try:
            self.runner.prepare_target()
            for case in self.cases:
                self.run_case(case)
        finally:
            self.runner.cleanup_target()

        logger.info(f"Total test time: {self.cases.total_ms / 1000.0:.3f} s")
        return self.cases

    def run_case(self, case: Case) -> None:
        """Run the CPU phase then the three file phases for one case."""
        self.run_cpu_phase(case)
        for phase in FILE_PHASES:
            self.run_file_phase(case, phase)

    def run_cpu_phase(self, case: Case) -> None:
        self._notify("CPU Test - case: ", case.number)
        lower, upper = self.cpu_config.lower_bound, self.cpu_config.upper_bound
        n = case.num_of_threads

        error = None
        result = None
        # a single thread scans on the calling thread without a pool
        pool_context = (
            WorkerPool(n, self.pool_timeout, name=f"cpu-{case.number}") if n > 1 else nullcontext()
        )
        timer = BenchmarkTimer(f"CPU - case {case.number}").start()
        try:
            with pool_context as pool:
                checker = make_checker(n, pool, self.cpu_config.range_width, timeout=self.pool_timeout)
                result = count_range(lower, upper, checker)
        except PoolTimeoutError as e:
            error = str(e)
            logger.error(f"Case {case.number}: CPU phase abandoned: {e}")
        elapsed = timer.stop(success=error is None, error_message=error)
        case.record(Phase.CPU, elapsed if error else result.elapsed_ms, error)

        if result is not None:
            logger.debug(
                f"Case {case.number}: perfect numbers in [{lower}, {upper}]: {result.perfect_numbers}"
            )

    def run_file_phase(self, case: Case, phase: Phase) -> None:
        self._notify(f"{phase.label} Test - case: ", case.number)
        error = None
        timer = BenchmarkTimer(f"{phase.label} - case {case.number}").start()
        try:
            with WorkerPool(case.num_of_threads, self.pool_timeout,
                            name=f"{phase.value}-{case.number}") as pool:
                self.runner.run_phase(phase, pool)
        except PoolTimeoutError as e:
            error = str(e)
            logger.error(f"Case {case.number}: {phase.label} phase abandoned: {e}")
        case.record(phase, timer.stop(success=error is None, error_message=error), error)

    def _notify(self, label: str, case_number: int) -> None:
        logger.debug(f"{label}{case_number}")
        if self.progress is not None:
            self.progress(label, case_number)
