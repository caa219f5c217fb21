#!/usr/bin/env python3
"""
Command-line entry point for threadbench.

Usage:
    threadbench                 # ten cases, one to ten threads
    threadbench 3               # a single case with three threads
    threadbench 2-6             # five cases, two to six threads
    threadbench 1 3 4 5 8       # one case per listed thread count
"""

import argparse
import logging
import re
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from threadbench.benchmark.cases import Cases
from threadbench.benchmark.config import BenchmarkConfig, merge_config_with_args
from threadbench.benchmark.core import get_hardware_info, print_hardware_info
from threadbench.benchmark.harness import SweepHarness
from threadbench.benchmark.report import ProgressLine, print_results
from threadbench.core.errors import ConfigurationError, ValidationError
from threadbench.logging import get_logger

PROG = "threadbench"

_NUMBER = re.compile(r"^\d+$")
_RANGE = re.compile(r"^(\d+)-(\d+)$")

EPILOG = f"""
Depending on the arguments the test can take several minutes to complete.

where:
  ARG1 = Either number of threads for a single test case or a range of threads
         for multiple test cases. If a single number is given then a single
         test case is run with the given number of threads. When a range is
         given, there will be a number of tests with an increasing number of
         threads. The range is given as LOWER-UPPER, where:
            LOWER = the number of threads in the first test
            UPPER = the number of threads in the last test
         There will be (UPPER - LOWER + 1) tests in total. So, if ARG1 is 2-4
         then there will be three tests, run with two, three and four threads.
  ARG2,
  ARG3,
  ARGn = Number of threads of the corresponding test case. The number of tests
         equals the number of given arguments.

NOTICE!
  If no arguments are given then there will be DEFAULT tests, each having an
  increasing number of threads from one (1) up to DEFAULT (10 unless set by
  'default_number_of_threads' in the configuration file). This is the same
  as running:
    {PROG} 1-DEFAULT

Examples:
  {PROG} --help
  {PROG}
  {PROG} 3
  {PROG} 2-6
  {PROG} 1 3 4 5 8
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="This application tests CPU and file operations performance.",
        usage=f"{PROG} [-h] [options] [ARG1 [ARG2 ARG3 ... ARGn]]",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG,
    )
    parser.add_argument(
        "threads",
        nargs="*",
        metavar="ARG",
        help="Number of threads, a LOWER-UPPER range, or a list of thread counts",
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Path to configuration file (default: ./threadbench.yaml or ~/.threadbench/threadbench.yaml)",
    )
    parser.add_argument(
        "--target-dir",
        type=Path,
        help="Directory in which benchmark files are created (default: __target__)",
    )
    parser.add_argument(
        "--pool-timeout",
        type=float,
        help="Seconds a worker pool may take to drain before its phase is abandoned",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Also write a detailed log to this file",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show debug messages on the console",
    )
    return parser


def parse_thread_counts(args: Sequence[str], default_number_of_threads: int) -> List[int]:
    """
    Turn the positional arguments into the ordered thread count sweep.

    Raises:
        ValidationError: If an argument is malformed or a thread count is below one.
    """
    if not args:
        return list(range(1, default_number_of_threads + 1))

    if len(args) == 1:
        arg = args[0]
        if _NUMBER.match(arg):
            return [_positive(arg)]
        match = _RANGE.match(arg)
        if match:
            lower, upper = _positive(match.group(1)), int(match.group(2))
            if upper < lower:
                raise ValidationError(
                    f"Upper bound must be greater than lower bound (lower:{lower}, upper:{upper}).",
                    field="range",
                    value=arg,
                )
            return list(range(lower, upper + 1))
        raise ValidationError(
            "The argument must be either a number of threads or a range of a number of threads.",
            field="threads",
            value=arg,
        )

    counts = []
    for arg in args:
        if not _NUMBER.match(arg):
            raise ValidationError("An argument must be a number.", field="threads", value=arg)
        counts.append(_positive(arg))
    return counts


def _positive(arg: str) -> int:
    value = int(arg)
    if value < 1:
        raise ValidationError("Number of threads must be at least one (1).", field="threads", value=value)
    return value


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = merge_config_with_args(BenchmarkConfig(args.config), args)
        cpu_config = config.get_cpu_config()
        file_config = config.get_file_config()
        pool_timeout = config.get_pool_timeout()
        thread_counts = parse_thread_counts(args.threads, config.get_default_number_of_threads())
    except (ValidationError, ConfigurationError) as e:
        print(f"! {e.message}")
        print()
        parser.print_usage()
        return 1

    logger = get_logger(
        PROG,
        log_file=args.log_file,
        console_level=logging.DEBUG if config.get('debug_mode') else logging.WARNING,
    )

    hardware = get_hardware_info()
    print_hardware_info(hardware)
    cases = Cases(thread_counts, hardware.cpu_logical_cores)

    progress = ProgressLine()
    harness = SweepHarness(cases, cpu_config, file_config, pool_timeout, progress=progress)
    try:
        harness.run()
    except KeyboardInterrupt:
        progress.finish()
        logger.warning("Benchmark run interrupted by user.")
        return 130
    progress.finish()

    print()
    print_results(cases)
    return 1 if cases.failed else 0


if __name__ == "__main__":
    sys.exit(main())
