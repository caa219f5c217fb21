#!/usr/bin/env python3
"""
Benchmarking primitives for threadbench.
Provides phase timing and host hardware profiling.
"""

import time
import platform
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import psutil

logger = logging.getLogger(__name__)


@dataclass
class HardwareInfo:
    """Container for hardware information."""
    # Operating system
    os_name: str
    os_version: str
    os_arch: str

    # CPU Information
    cpu_model: str
    cpu_physical_cores: int
    cpu_logical_cores: int

    # Memory Information
    total_memory_gb: float

    # Python runtime
    python_implementation: str
    python_version: str
    python_compiler: str

    timestamp: str


class BenchmarkTimer:
    """
    Wall-clock timer for one benchmark phase.

    Usage:
        with BenchmarkTimer("File W - case 1") as timer:
            ...
        timer.elapsed_ms
    """

    def __init__(self, process_name: str):
        """
        Args:
            process_name: Name of the phase being timed (used in log output)
        """
        self.process_name = process_name
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None
        self.success = True
        self.error_message: Optional[str] = None

    def start(self) -> "BenchmarkTimer":
        """Start the timer."""
        self.start_time = time.perf_counter()
        self.end_time = None
        logger.debug(f"[BENCHMARK] Starting: {self.process_name}")
        return self

    def stop(self, success: bool = True, error_message: Optional[str] = None) -> float:
        """
        Stop the timer.

        Args:
            success: Whether the phase completed normally
            error_message: Optional reason if it did not

        Returns:
            Elapsed time in milliseconds
        """
        if self.start_time is None:
            raise RuntimeError(f"Timer '{self.process_name}' was never started")
        self.end_time = time.perf_counter()
        self.success = success
        self.error_message = error_message
        elapsed = self.elapsed_ms
        status = "Completed" if success else "Failed"
        logger.debug(
            f"[BENCHMARK] {status}: {self.process_name} in {self._format_duration(elapsed / 1000.0)}"
        )
        return elapsed

    @property
    def elapsed_ms(self) -> float:
        """Elapsed milliseconds; measured up to now while the timer runs."""
        if self.start_time is None:
            return 0.0
        end = self.end_time if self.end_time is not None else time.perf_counter()
        return (end - self.start_time) * 1000.0

    @staticmethod
    def _format_duration(seconds: float) -> str:
        """Format duration in human-readable format."""
        hours = int(seconds // 3600)
        minutes = int((seconds % 3600) // 60)
        secs = seconds % 60

        if hours > 0:
            return f"{hours}h {minutes}m {int(secs)}s"
        elif minutes > 0:
            return f"{minutes}m {int(secs)}s"
        else:
            return f"{secs:.3f}s"

    def __enter__(self):
        """Context manager entry."""
        return self.start()

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        success = exc_type is None
        error_message = str(exc_val) if exc_val else None
        self.stop(success=success, error_message=error_message)
        return False


def get_hardware_info() -> HardwareInfo:
    """
    Extract hardware and runtime information of the host.

    Returns:
        HardwareInfo object containing system details
    """
    memory = psutil.virtual_memory()

    return HardwareInfo(
        os_name=platform.system(),
        os_version=platform.release(),
        os_arch=platform.machine(),
        cpu_model=_get_cpu_model(),
        cpu_physical_cores=psutil.cpu_count(logical=False) or 0,
        cpu_logical_cores=psutil.cpu_count(logical=True) or 0,
        total_memory_gb=memory.total / (1024**3),
        python_implementation=platform.python_implementation(),
        python_version=platform.python_version(),
        python_compiler=platform.python_compiler(),
        timestamp=datetime.now().isoformat(),
    )


def _get_cpu_model() -> str:
    """Get CPU model name."""
    try:
        if platform.system() == "Linux":
            with open("/proc/cpuinfo", "r") as f:
                for line in f:
                    if "model name" in line:
                        return line.split(":")[1].strip()
    except OSError:
        pass

    return platform.processor() or "Unknown CPU"


def print_hardware_info(hardware_info: Optional[HardwareInfo] = None):
    """
    Print the host header shown before a run.

    Args:
        hardware_info: HardwareInfo object, if None will fetch current info
    """
    if hardware_info is None:
        hardware_info = get_hardware_info()

    print(f"OS: {hardware_info.os_name}, {hardware_info.os_version} ({hardware_info.os_arch})")
    print(f"CPU: {hardware_info.cpu_model}")
    print(
        f"Number of cores: {hardware_info.cpu_logical_cores} "
        f"({hardware_info.cpu_physical_cores} physical)"
    )
    print(f"Memory: {hardware_info.total_memory_gb:.2f} GB")
    print(
        f"Python: {hardware_info.python_implementation}, {hardware_info.python_version} "
        f"({hardware_info.python_compiler})"
    )
