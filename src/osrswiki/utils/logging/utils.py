# ABOUTME: Logger utilities with context binding and API call tracking decorators
# ABOUTME: Provides get_logger plus decorators for consistent structured logging

import functools
import time
import uuid
from collections.abc import Callable
from typing import Any, TypeVar

import structlog

F = TypeVar("F", bound=Callable[..., Any])


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a logger instance with automatic module detection.

    Args:
        name: Logger name, auto-detected from caller if None

    Returns:
        Configured structlog logger instance
    """
    if name is None:
        import inspect

        frame = inspect.currentframe()
        if frame and frame.f_back:
            name = frame.f_back.f_globals.get("__name__", "unknown")

    return structlog.get_logger(name or "osrswiki")


def generate_operation_id() -> str:
    """Generate a short unique id for correlating log records of one operation."""
    return str(uuid.uuid4())[:8]


def log_api_call(api_name: str, **context) -> Callable[[F], F]:
    """Decorator to log upstream API calls with duration and outcome.

    Args:
        api_name: Name of the API being called
        **context: Additional context for the API call

    Returns:
        Decorated coroutine function with API call logging
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            logger = get_logger(func.__module__)
            bound_logger = logger.bind(api_name=api_name, call_id=generate_operation_id(), **context)

            bound_logger.debug(f"API call to {api_name}")
            start_time = time.time()

            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                bound_logger.error(
                    f"API call to {api_name} failed",
                    duration_seconds=round(time.time() - start_time, 3),
                    error=str(e),
                    error_type=type(e).__name__,
                    success=False,
                )
                raise

            bound_logger.info(
                f"API call to {api_name} succeeded",
                duration_seconds=round(time.time() - start_time, 3),
                success=True,
            )
            return result

        return wrapper  # type: ignore[return-value]

    return decorator


class LogContext:
    """Context manager for binding logger context."""

    def __init__(self, logger: structlog.stdlib.BoundLogger, **context):
        self.logger = logger
        self.context = context
        self.bound_logger = None

    def __enter__(self) -> structlog.stdlib.BoundLogger:
        self.bound_logger = self.logger.bind(**self.context)
        return self.bound_logger

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None and self.bound_logger is not None:
            self.bound_logger.error("Context operation failed", error=str(exc_val), error_type=exc_type.__name__)


def with_operation_context(operation: str, **context) -> LogContext:
    """Create a logging context for a named operation (search, feed fetch, ...).

    Args:
        operation: Name of the operation
        **context: Additional context to bind

    Returns:
        LogContext manager with operation context
    """
    logger = get_logger()
    return LogContext(logger, operation=operation, operation_id=generate_operation_id(), **context)


def with_store_context(path: str) -> LogContext:
    """Create a logging context for tile store operations.

    Args:
        path: Path of the tile store file

    Returns:
        LogContext manager with store context
    """
    logger = get_logger()
    return LogContext(logger, store_path=path, entity_type="tile_store")
