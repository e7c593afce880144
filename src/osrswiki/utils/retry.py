# ABOUTME: Caller-side retry policy for wiki network calls using tenacity
# ABOUTME: The services never retry on their own; callers opt in by decorating their calls

import functools
from collections.abc import Callable
from typing import Any

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from osrswiki.feed.errors import FetchFailedError
from osrswiki.search.errors import NetworkUnavailableError, RateLimitedError, SearchTimeoutError, ServerError
from osrswiki.utils.logging import get_logger

logger = get_logger(__name__)

# Transient conditions worth another attempt; contract breaks (malformed responses) are not
RETRYABLE_ERRORS: tuple[type[Exception], ...] = (
    NetworkUnavailableError,
    SearchTimeoutError,
    RateLimitedError,
    ServerError,
    FetchFailedError,
)


def _log_retry(retry_state: RetryCallState) -> None:
    exception = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "Retrying wiki call",
        attempt=retry_state.attempt_number,
        error=str(exception),
        error_type=type(exception).__name__ if exception else None,
    )


def wiki_retry(
    max_attempts: int = 3,
    min_wait: float = 1.0,
    max_wait: float = 10.0,
    multiplier: float = 2.0,
    retry_on: tuple[type[Exception], ...] = RETRYABLE_ERRORS,
):
    """Retry an async wiki call on transient failures with exponential backoff.

    The final failure is re-raised unchanged so callers still see the typed error.
    """

    def decorator(func: Callable):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> Any:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(max_attempts),
                wait=wait_exponential(multiplier=multiplier, min=min_wait, max=max_wait),
                retry=retry_if_exception_type(retry_on),
                before_sleep=_log_retry,
                reraise=True,
            ):
                with attempt:
                    return await func(*args, **kwargs)

        return wrapper

    return decorator
