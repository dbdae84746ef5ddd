r"""Callback types for observing the retry lifecycle.

The callback system provides three lifecycle hooks:
- on_retry: Called after a failed attempt, before the backoff wait
- on_success: Called when an attempt succeeds
- on_failure: Called when all retries are exhausted

Example:
    ```pycon
    >>> from aretry import retry
    >>> from aretry.callbacks import RetryInfo
    >>> def log_retry(info: RetryInfo) -> None:
    ...     print(f"Retry {info.attempt}/{info.max_retries} in {info.wait_time}ms")
    ...
    >>> async def fetch(item, attempt):
    ...     return item
    ...
    >>> wrapped = retry(fetch, on_retry=log_retry)

    ```
"""

from __future__ import annotations

__all__ = [
    "CallbackConfig",
    "FailureInfo",
    "RetryInfo",
    "SuccessInfo",
    "invoke_on_failure",
    "invoke_on_retry",
    "invoke_on_success",
]

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.exceptions import RetryError


@dataclass
class RetryInfo:
    """Information passed to on_retry callback.

    Attributes:
        attempt: The attempt about to run after the wait (0-indexed).
            The first retry is attempt 1.
        max_retries: Maximum number of retries configured.
        wait_time: The wait time in milliseconds before this attempt.
        jitter: Whether full jitter was applied to the wait time.
        error: The exception that triggered the retry.
    """

    attempt: int
    max_retries: int
    wait_time: float
    jitter: bool
    error: Exception


@dataclass
class SuccessInfo:
    """Information passed to on_success callback.

    Attributes:
        attempt: The attempt that succeeded (0-indexed).
        max_retries: Maximum number of retries configured.
        result: The value returned by the operation.
        total_time: Total time spent on all attempts including backoff (seconds).
    """

    attempt: int
    max_retries: int
    result: Any
    total_time: float


@dataclass
class FailureInfo:
    """Information passed to on_failure callback.

    Attributes:
        attempt: The final attempt (0-indexed).
        max_retries: Maximum number of retries configured.
        error: The terminal ``RetryError``.
        total_time: Total time spent on all attempts including backoff (seconds).
    """

    attempt: int
    max_retries: int
    error: RetryError
    total_time: float


@dataclass
class CallbackConfig:
    """Configuration for callbacks.

    Attributes:
        on_retry: Optional callback invoked before each backoff wait.
        on_success: Optional callback invoked when an attempt succeeds.
        on_failure: Optional callback invoked when all retries are exhausted.
    """

    on_retry: Callable[[RetryInfo], None] | None = None
    on_success: Callable[[SuccessInfo], None] | None = None
    on_failure: Callable[[FailureInfo], None] | None = None


def invoke_on_retry(
    on_retry: Callable[[RetryInfo], None] | None,
    *,
    attempt: int,
    max_retries: int,
    wait_time: float,
    jitter: bool,
    error: Exception,
) -> None:
    """Invoke on_retry callback if provided."""
    if on_retry is not None:
        on_retry(
            RetryInfo(
                attempt=attempt,
                max_retries=max_retries,
                wait_time=wait_time,
                jitter=jitter,
                error=error,
            )
        )


def invoke_on_success(
    on_success: Callable[[SuccessInfo], None] | None,
    *,
    attempt: int,
    max_retries: int,
    result: Any,
    start_time: float,
) -> None:
    """Invoke on_success callback if provided.

    Args:
        on_success: Optional callback to invoke when an attempt succeeds.
        attempt: The attempt that succeeded (0-indexed).
        max_retries: Maximum number of retries.
        result: The value returned by the operation.
        start_time: The timestamp when the invocation started.
    """
    if on_success is not None:
        on_success(
            SuccessInfo(
                attempt=attempt,
                max_retries=max_retries,
                result=result,
                total_time=time.time() - start_time,
            )
        )


def invoke_on_failure(
    on_failure: Callable[[FailureInfo], None] | None,
    *,
    attempt: int,
    max_retries: int,
    error: RetryError,
    start_time: float,
) -> None:
    """Invoke on_failure callback if provided.

    Args:
        on_failure: Optional callback to invoke when all retries are exhausted.
        attempt: The final attempt (0-indexed).
        max_retries: Maximum number of retries.
        error: The terminal ``RetryError``.
        start_time: The timestamp when the invocation started.
    """
    if on_failure is not None:
        on_failure(
            FailureInfo(
                attempt=attempt,
                max_retries=max_retries,
                error=error,
                total_time=time.time() - start_time,
            )
        )
