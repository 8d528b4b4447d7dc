"""
Resilience Helpers.

The record client never retries on its own. Callers that want retries opt
in explicitly with `retry_transient`, which only retries errors flagged
`retryable` (NetworkError, 5xx ServerError).

Usage:
    from crud_client.core.resilience import retry_transient

    record = await retry_transient(attempts=3)(client.get_by_id)("abc123")
"""

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from crud_client.core.exceptions import ApplicationError
from crud_client.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def is_retryable(exc: BaseException) -> bool:
    """True for application errors that flag themselves as transient."""
    return isinstance(exc, ApplicationError) and bool(exc.retryable)


def log_retry(retry_state: Any) -> None:
    """Tenacity before_sleep callback that emits structured retry events.

    Args:
        retry_state: tenacity.RetryCallState instance
    """
    duration_ms = None
    if retry_state.outcome_timestamp and retry_state.start_time:
        duration_ms = round(
            (retry_state.outcome_timestamp - retry_state.start_time) * 1000
        )

    error = None
    if retry_state.outcome and retry_state.outcome.failed:
        error = str(retry_state.outcome.exception())

    fn_name = getattr(retry_state.fn, "__name__", "unknown")

    logger.warning(
        f"Retrying {fn_name} (attempt {retry_state.attempt_number})",
        resilience_event="retry_attempt",
        dependency=fn_name,
        attempt=retry_state.attempt_number,
        duration_ms=duration_ms,
        error=error,
    )


def retry_transient(
    attempts: int = 3,
    min_wait: float = 1,
    max_wait: float = 10,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Build a retry decorator for coroutine functions.

    Args:
        attempts: Total attempts including the first call
        min_wait: Lower bound of the exponential backoff, in seconds
        max_wait: Upper bound of the exponential backoff, in seconds

    Returns:
        Decorator; the last error is re-raised once attempts are exhausted
    """
    if attempts < 1:
        raise ValueError("attempts must be at least 1")

    return retry(
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=1, min=min_wait, max=max_wait),
        retry=retry_if_exception(is_retryable),
        before_sleep=log_retry,
        reraise=True,
    )
