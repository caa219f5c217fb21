"""
threadbench Benchmarking Module

Measures CPU-bound and filesystem-bound throughput across a sweep of worker
thread counts.

Components:
- partition: divisor range partitioning and divisor summation
- perfect: sequential and pooled perfect number checks
- pool: bounded worker pool with time-limited shutdown
- files: write/read/delete file workload
- cases: case table, one case per thread count
- harness: sweep harness running every phase per case
- core: phase timer and host hardware information
- config: YAML configuration with defaults
- report: progress line and results table

Usage:
    # Run from command line
    threadbench 1-4

    # Or use Python API
    from threadbench.benchmark import Cases, SweepHarness
    cases = SweepHarness(Cases.from_range(1, 4)).run()
"""

from .cases import Case, Cases, Phase
from .config import BenchmarkConfig, CpuWorkloadConfig, FileWorkloadConfig
from .core import BenchmarkTimer, HardwareInfo, get_hardware_info, print_hardware_info
from .files import FileIndexCounter, FileWorkloadRunner
from .harness import SweepHarness
from .partition import Partition, partition_range, sum_of_factors_in_range
from .perfect import IsPerfect, IsPerfectConcurrent, Perfectum, count_range, make_checker
from .pool import WorkerPool
from .report import ProgressLine, format_results, print_results

__all__ = [
    'Case',
    'Cases',
    'Phase',
    'BenchmarkConfig',
    'CpuWorkloadConfig',
    'FileWorkloadConfig',
    'BenchmarkTimer',
    'HardwareInfo',
    'get_hardware_info',
    'print_hardware_info',
    'FileIndexCounter',
    'FileWorkloadRunner',
    'SweepHarness',
    'Partition',
    'partition_range',
    'sum_of_factors_in_range',
    'IsPerfect',
    'IsPerfectConcurrent',
    'Perfectum',
    'count_range',
    'make_checker',
    'WorkerPool',
    'ProgressLine',
    'format_results',
    'print_results',
]
