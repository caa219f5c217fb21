#!/usr/bin/env python3
"""
Unit tests for the bounded worker pool (benchmark/pool.py)
"""

import logging
import threading

import pytest

from threadbench.benchmark.pool import WorkerPool
from threadbench.core.errors import PoolTimeoutError, ValidationError


@pytest.mark.unit
class TestWorkerPool:
    """Test WorkerPool"""

    @pytest.mark.parametrize("num_of_threads", [0, -1])
    def test_rejects_fewer_than_one_thread(self, num_of_threads):
        """A pool needs at least one worker"""
        with pytest.raises(ValidationError) as exc_info:
            WorkerPool(num_of_threads)
        assert exc_info.value.details["value"] == num_of_threads

    def test_submit_returns_results(self):
        """Futures carry each unit's return value"""
        with WorkerPool(4) as pool:
            futures = [pool.submit(pow, n, 2) for n in range(10)]
        assert [f.result() for f in futures] == [n * n for n in range(10)]

    def test_all_units_run_before_shutdown_returns(self):
        """Every queued unit has finished once the pool is drained"""
        done = []
        lock = threading.Lock()

        def unit(n):
            with lock:
                done.append(n)

        pool = WorkerPool(8)
        for n in range(200):
            pool.execute(unit, n)
        pool.shutdown_and_wait()

        assert sorted(done) == list(range(200))
        assert pool.pending == 0

    def test_worker_threads_are_named(self):
        """Worker threads carry the pool name"""
        with WorkerPool(1, name="file_write-3") as pool:
            name = pool.submit(lambda: threading.current_thread().name).result()
        assert name.startswith("file_write-3")

    def test_timeout_raises_and_reports_pending(self):
        """A pool that does not drain in time is abandoned; queued units count as pending"""
        release = threading.Event()
        pool = WorkerPool(1, shutdown_timeout=0.1)
        try:
            for _ in range(5):
                pool.execute(release.wait)
            with pytest.raises(PoolTimeoutError) as exc_info:
                pool.shutdown_and_wait()
            assert exc_info.value.pending == 5
            assert "5 unit(s) of work unfinished" in exc_info.value.message
            assert exc_info.value.timeout == 0.1
            assert exc_info.value.error_code == "POOL_TIMEOUT"
        finally:
            release.set()

    def test_explicit_timeout_overrides_default(self):
        """The timeout argument wins over shutdown_timeout"""
        release = threading.Event()
        pool = WorkerPool(1, shutdown_timeout=60)
        try:
            pool.execute(release.wait)
            with pytest.raises(PoolTimeoutError):
                pool.shutdown_and_wait(timeout=0.05)
        finally:
            release.set()

    def test_failed_unit_is_logged(self, caplog):
        """Exceptions of fire-and-forget units are logged, not raised"""

        def boom():
            raise RuntimeError("disk on fire")

        with caplog.at_level(logging.ERROR, logger="threadbench.benchmark.pool"):
            with WorkerPool(2) as pool:
                pool.execute(boom)

        assert "Unit of work failed" in caplog.text
        assert "disk on fire" in caplog.text

    def test_context_manager_cancels_on_error(self):
        """Leaving the block with an exception does not wait for queued work"""
        release = threading.Event()
        try:
            with pytest.raises(KeyError):
                with WorkerPool(1, shutdown_timeout=0.1) as pool:
                    pool.execute(release.wait)
                    queued = pool.submit(lambda: "never")
                    raise KeyError("stop")
            assert queued.cancelled()
        finally:
            release.set()
