"""
Error handling utilities for the eCFR Agency Tracker.

This module defines the error taxonomy shared by the fetch, parse and
storage layers, along with logging helpers used at component boundaries.
"""

import logging
import time
import functools
from typing import Any, Callable, Optional

from .models import utc_now


logger = logging.getLogger(__name__)


class ECFRTrackerError(Exception):
    """Base exception for eCFR Agency Tracker errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None,
                 recoverable: bool = False):
        """
        Initialize eCFR Tracker error.

        Args:
            message: Error message
            cause: Original exception that caused this error
            recoverable: Whether this error is recoverable
        """
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.recoverable = recoverable
        self.timestamp = utc_now()


class NetworkError(ECFRTrackerError):
    """Remote call failed or returned a non-success status."""
    pass


class ParseError(ECFRTrackerError):
    """Response body is not a valid JSON search result."""
    pass


class StorageReadError(ECFRTrackerError):
    """Stored file is unreadable or corrupt."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message, cause=cause, recoverable=True)


class StorageWriteError(ECFRTrackerError):
    """Stored file could not be written."""
    pass


class ConfigurationError(ECFRTrackerError):
    """Error in configuration or setup."""
    pass


def log_execution_time(func: Callable) -> Callable:
    """
    Decorator to log function execution time.

    Args:
        func: Function to wrap

    Returns:
        Wrapped function with execution time logging
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> Any:
        start_time = time.time()
        func_name = f"{func.__module__}.{func.__name__}"

        try:
            logger.debug(f"Starting {func_name}")
            result = func(*args, **kwargs)
            execution_time = time.time() - start_time
            logger.info(f"Completed {func_name} in {execution_time:.2f}s")
            return result

        except Exception as e:
            execution_time = time.time() - start_time
            logger.error(f"Failed {func_name} after {execution_time:.2f}s: {e}")
            raise

    return wrapper


def describe_error(error: Exception) -> str:
    """
    Build a one-line description of an error for user-facing output.

    Args:
        error: Error to describe

    Returns:
        Message, followed by the underlying cause when there is one
    """
    if isinstance(error, ECFRTrackerError):
        if error.cause is not None:
            return f"{error.message} (caused by: {error.cause})"
        return error.message
    return str(error)
