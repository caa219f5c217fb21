"""
Logging utilities for threadbench.

This package centralizes the handlers and logger factories used by the CLI
and the benchmark engine.
"""

from .logging_util import (
    FlushingFileHandler,
    FlushingStreamHandler,
    HostTimestampFormatter,
    get_file_only_logger,
    get_logger,
)

__all__ = [
    "FlushingFileHandler",
    "FlushingStreamHandler",
    "HostTimestampFormatter",
    "get_file_only_logger",
    "get_logger",
]
