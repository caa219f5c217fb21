#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
threadbench Error Handling Module
Custom exceptions shared by the benchmark engine, configuration and CLI.
"""

from typing import Optional, Dict, Any


class ThreadBenchError(Exception):
    """
    Base exception for all threadbench errors.

    Args:
        message: Human-readable error message
        error_code: Optional error code for categorization
        details: Optional dictionary with additional error details
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self):
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
        }


class ValidationError(ThreadBenchError):
    """
    Raised when input validation fails (thread counts, pool sizes).

    Args:
        message: Error message
        field: Name of the field that failed validation
        value: The invalid value
    """

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = value
        super().__init__(message, error_code="VALIDATION_ERROR", details=details)


class ConfigurationError(ThreadBenchError):
    """
    Raised when configuration is invalid or cannot be loaded.

    Args:
        message: Error message
        config_key: The configuration key that caused the error
    """

    def __init__(self, message: str, config_key: Optional[str] = None):
        details = {"config_key": config_key} if config_key else {}
        super().__init__(message, error_code="CONFIG_ERROR", details=details)


class PoolTimeoutError(ThreadBenchError):
    """
    Raised when a worker pool does not drain within its shutdown timeout.

    Args:
        message: Error message
        timeout: The timeout that elapsed, in seconds
        pending: Number of units of work still unfinished
    """

    def __init__(self, message: str, timeout: Optional[float] = None, pending: Optional[int] = None):
        details = {}
        if timeout is not None:
            details["timeout"] = timeout
        if pending is not None:
            details["pending"] = pending
        super().__init__(message, error_code="POOL_TIMEOUT", details=details)
        self.timeout = timeout
        self.pending = pending
