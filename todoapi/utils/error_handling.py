"""
Error handling for the todo API service.

This module provides the exception hierarchy raised by the services and
stores, plus helpers for logging and wrapping unexpected failures.
"""

import asyncio
import functools
import logging
import time
import traceback
from typing import Any, Callable, Dict, List, Optional, Type, Union

logger = logging.getLogger(__name__)


class TodoAPIError(Exception):
    """Base exception class for all service errors."""
    def __init__(self, message: str, component: str = "unknown", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.component = component
        self.details = details or {}
        self.timestamp = time.time()


class AccountNotFound(TodoAPIError):
    """No account matches the supplied username."""
    pass


class InvalidCredential(TodoAPIError):
    """The password does not match the stored one."""
    pass


class IssuanceLimitReached(TodoAPIError):
    """The account already owns the configured maximum number of API keys."""
    pass


class KeyNotFound(TodoAPIError):
    """The referenced API key does not exist."""
    pass


class TaskNotFound(TodoAPIError):
    """The task does not exist for the resolved owner."""
    pass


class UsernameTaken(TodoAPIError):
    """An account with the requested username already exists."""
    pass


class IntegrityFault(TodoAPIError):
    """A mutation affected a number of rows other than exactly one."""
    pass


class StorageError(TodoAPIError):
    """Error with storage operations (file, database, etc.)."""
    pass


def catch_and_log(
    component: str,
    exceptions: Union[Type[Exception], List[Type[Exception]]] = Exception,
    default_return: Any = None,
    raise_service_error: bool = False,
    service_error_class: Type[TodoAPIError] = TodoAPIError
) -> Callable:
    """
    Decorator to catch exceptions, log them, and optionally convert to service errors.

    Args:
        component: Component name for logging
        exceptions: Exception(s) to catch
        default_return: Default return value if an exception is caught
        raise_service_error: Whether to raise a service error after catching
        service_error_class: Service error class to use if raising

    Returns:
        Decorated function
    """
    if isinstance(exceptions, list):
        exceptions = tuple(exceptions)

    def _handle(func, e):
        stack_trace = traceback.format_exc()

        logger.error(f"Error in {func.__name__} ({component}): {e}")
        logger.debug(f"Stack trace: {stack_trace}")

        if raise_service_error:
            raise service_error_class(
                message=str(e),
                component=component,
                details={"original_error": e.__class__.__name__}
            ) from e

        return default_return

    def decorator(func):
        @functools.wraps(func)
        def sync_wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except exceptions as e:
                return _handle(func, e)

        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except exceptions as e:
                return _handle(func, e)

        # Return the appropriate wrapper based on whether the function is async
        if asyncio.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator


class ErrorContext:
    """
    Context manager that wraps foreign exceptions into service errors.

    Example:
        with ErrorContext("json_store", "Failed to save tasks", StorageError):
            json.dump(data, f)
    """

    def __init__(self, component: str, message: str,
                 error_class: Type[TodoAPIError] = TodoAPIError):
        """
        Initialize the error context.

        Args:
            component: Component name
            message: Error message
            error_class: Service error class to raise
        """
        self.component = component
        self.message = message
        self.error_class = error_class

    def __enter__(self):
        """Enter the context."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit the context, wrapping any non-service error."""
        if exc_type is None:
            return False

        logger.error(f"Error in {self.component}: {self.message} - {exc_val}")

        # Service errors propagate unchanged
        if isinstance(exc_val, TodoAPIError):
            return False

        raise self.error_class(
            message=f"{self.message}: {exc_val}",
            component=self.component,
            details={"original_error": exc_type.__name__}
        ) from exc_val
