"""Retry utilities using tenacity for storage writes."""

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    wait_random,
)

from idiomcards.ports.deck_repository import TransientStorageError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Default retry configuration
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_INITIAL_WAIT = 0.5  # seconds
DEFAULT_MAX_WAIT = 5.0  # seconds
DEFAULT_JITTER = 0.5  # seconds

RETRYABLE_EXCEPTIONS: tuple[type[Exception], ...] = (
    TransientStorageError,
    ConnectionError,
    TimeoutError,
)


def _log_retry(retry_state: RetryCallState) -> None:
    """Log a failed attempt before tenacity sleeps."""
    outcome = retry_state.outcome
    error = outcome.exception() if outcome is not None else None
    logger.warning(
        f"Retry attempt {retry_state.attempt_number + 1} after error: {error}",
        extra={"attempt": retry_state.attempt_number},
    )


async def retry_operation(
    operation: Callable[..., Awaitable[T]],
    *args,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    initial_wait: float = DEFAULT_INITIAL_WAIT,
    max_wait: float = DEFAULT_MAX_WAIT,
    retryable_exceptions: tuple[type[Exception], ...] = RETRYABLE_EXCEPTIONS,
    **kwargs,
) -> T:
    """Execute an async operation with exponential backoff retry.

    Wait formula: min(initial * 2^n, max) + random(0, jitter)

    Args:
        operation: Async function to execute
        *args: Positional arguments for operation
        max_attempts: Maximum number of attempts
        initial_wait: Initial wait time in seconds
        max_wait: Maximum wait time in seconds
        retryable_exceptions: Exception types to retry on
        **kwargs: Keyword arguments for operation

    Returns:
        Result of the operation

    Raises:
        Exception: The last exception once attempts are exhausted, or the
            first non-retryable one
    """
    async for attempt in AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=initial_wait, max=max_wait)
        + wait_random(0, min(DEFAULT_JITTER, initial_wait)),
        retry=retry_if_exception_type(retryable_exceptions),
        before_sleep=_log_retry,
        reraise=True,
    ):
        with attempt:
            return await operation(*args, **kwargs)

    raise RuntimeError("No attempts made")  # pragma: no cover
