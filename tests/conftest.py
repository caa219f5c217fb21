#!/usr/bin/env python3
"""
Pytest configuration for threadbench tests.

Workloads are shrunk to a few kilobytes and a few hundred candidates so the
whole suite runs in seconds; only tests marked ``slow`` use the real sizes.
"""

import logging

import pytest

from threadbench.benchmark.config import CpuWorkloadConfig, FileWorkloadConfig


@pytest.fixture(autouse=True)
def reset_threadbench_logger():
    """The CLI configures the 'threadbench' logger; undo it so caplog sees records."""
    yield
    logger = logging.getLogger("threadbench")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def small_cpu_config():
    return CpuWorkloadConfig(range_width=100, lower_bound=490, upper_bound=500)


@pytest.fixture
def small_file_config(tmp_path):
    return FileWorkloadConfig(
        target_dir=tmp_path / "__target__",
        number_of_files=12,
        total_number_of_bytes=12 * 256,
        buffer_size=64,
    )
