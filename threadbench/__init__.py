"""
threadbench

Measures how CPU-bound and filesystem-bound workloads scale across an
increasing number of worker threads.
"""

__version__ = "1.0.0"

from .logging import get_logger

__all__ = ["get_logger", "__version__"]
