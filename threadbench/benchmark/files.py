#!/usr/bin/env python3
"""
Filesystem workload: write, read back and delete a fixed set of files.

Each phase dispatches one unit of work per file to a worker pool. A unit
takes its file index from a counter owned by that phase invocation, so every
phase starts again at index 1 and no two units touch the same file.
"""

import logging
import random
import string
import threading
from pathlib import Path

from threadbench.benchmark.cases import Phase
from threadbench.benchmark.config import FileWorkloadConfig
from threadbench.benchmark.pool import WorkerPool

logger = logging.getLogger(__name__)

ALPHA = string.ascii_lowercase + string.ascii_uppercase + string.digits


class FileIndexCounter:
    """Thread-safe fetch-and-add counter for 1-based file indices."""

    def __init__(self, start: int = 1):
        self._next = start
        self._lock = threading.Lock()

    def get_and_increment(self) -> int:
        with self._lock:
            value = self._next
            self._next += 1
            return value

    @property
    def value(self) -> int:
        """The index the next caller will receive."""
        with self._lock:
            return self._next


class FileWorkloadRunner:
    """Runs the write, read and delete phases of the file benchmark."""

    def __init__(self, config: FileWorkloadConfig):
        self.config = config

    @property
    def target_dir(self) -> Path:
        return self.config.target_dir

    def path_for(self, index: int) -> Path:
        return self.target_dir / self.config.filename_pattern.format(index=index)

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------
    def run_phase(self, phase: Phase, pool: WorkerPool) -> FileIndexCounter:
        """Dispatch the units of work for one file phase to ``pool``."""
        if phase is Phase.FILE_WRITE:
            return self.write_files(pool)
        if phase is Phase.FILE_READ:
            return self.read_files(pool)
        if phase is Phase.FILE_DELETE:
            return self.delete_files(pool)
        raise ValueError(f"Not a file phase: {phase}")

    def write_files(self, pool: WorkerPool) -> FileIndexCounter:
        return self._dispatch(pool, self._write_one)

    def read_files(self, pool: WorkerPool) -> FileIndexCounter:
        return self._dispatch(pool, self._read_one)

    def delete_files(self, pool: WorkerPool) -> FileIndexCounter:
        return self._dispatch(pool, self._delete_one)

    def _dispatch(self, pool: WorkerPool, unit) -> FileIndexCounter:
        counter = FileIndexCounter()
        for _ in range(self.config.number_of_files):
            pool.execute(unit, counter)
        return counter

    # ------------------------------------------------------------------
    # Units of work
    # ------------------------------------------------------------------
    def _write_one(self, counter: FileIndexCounter) -> None:
        path = self.path_for(counter.get_and_increment())
        buffer_size = self.config.buffer_size
        rnd = random.Random()
        try:
            with open(path, 'w') as f:
                for _ in range(self.config.number_of_writes):
                    f.write(''.join(rnd.choices(ALPHA, k=buffer_size)))
        except OSError as e:
            logger.error(f"Failed to write {path}: {e}")

    def _read_one(self, counter: FileIndexCounter) -> None:
        path = self.path_for(counter.get_and_increment())
        buffer_size = self.config.buffer_size
        try:
            with open(path, 'r') as f:
                while f.read(buffer_size):
                    pass
        except OSError as e:
            logger.error(f"Failed to read {path}: {e}")

    def _delete_one(self, counter: FileIndexCounter) -> None:
        path = self.path_for(counter.get_and_increment())
        try:
            path.unlink()
        except OSError as e:
            logger.error(f"Failed to delete {path}: {e}")

    # ------------------------------------------------------------------
    # Target directory
    # ------------------------------------------------------------------
    def prepare_target(self) -> None:
        """Remove leftovers of an earlier run and create the target directory."""
        self.cleanup_target()
        self.target_dir.mkdir(parents=True, exist_ok=True)
        logger.debug(f"Target directory ready: {self.target_dir}")

    def cleanup_target(self) -> None:
        """Best-effort removal of every benchmark file and the target directory."""
        for index in range(1, self.config.number_of_files + 1):
            path = self.path_for(index)
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                logger.warning(f"Could not remove {path}: {e}")
        try:
            if self.target_dir.exists():
                self.target_dir.rmdir()
        except OSError as e:
            logger.warning(f"Could not remove target directory {self.target_dir}: {e}")
