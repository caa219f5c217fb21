"""
Core utilities shared across threadbench.
"""

from .errors import (
    ThreadBenchError,
    ValidationError,
    ConfigurationError,
    PoolTimeoutError,
)

__all__ = [
    "ThreadBenchError",
    "ValidationError",
    "ConfigurationError",
    "PoolTimeoutError",
]
