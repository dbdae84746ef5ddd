r"""Retry wrapper for asynchronous operations.

This module implements exponential backoff with full jitter, following
the AWS recommendations:
- https://docs.aws.amazon.com/general/latest/gr/api-retries.html
- https://aws.amazon.com/blogs/architecture/exponential-backoff-and-jitter/
"""

from __future__ import annotations

__all__ = ["retry"]

import functools
from typing import TYPE_CHECKING, TypeVar

from aretry.callbacks import CallbackConfig
from aretry.config import RetryOptions
from aretry.executor import AsyncRetryExecutor

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from aretry.callbacks import FailureInfo, RetryInfo, SuccessInfo

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")


def retry(
    operation: Callable[[InputT, int], Awaitable[OutputT]],
    options: RetryOptions | None = None,
    *,
    wait_ratio: float | None = None,
    retries: int | None = None,
    jitter: bool | None = None,
    maximum_backoff: float | None = None,
    log: Callable[[str], None] | None = None,
    on_retry: Callable[[RetryInfo], None] | None = None,
    on_success: Callable[[SuccessInfo], None] | None = None,
    on_failure: Callable[[FailureInfo], None] | None = None,
) -> Callable[..., Awaitable[OutputT]]:
    """Wrap an async operation with automatic retry.

    The options are resolved and validated once, before the wrapper is
    returned. Each call of the wrapper is an independent retry sequence
    with its own attempt counter, so the wrapper can be awaited
    concurrently, for example with ``asyncio.gather``.

    Args:
        operation: Coroutine function called as ``operation(item, attempt)``
            where ``attempt`` is the zero-based attempt index. Every
            exception it raises is retried.
        options: Optional base options. Defaults to ``RetryOptions()``.
        wait_ratio: Overrides ``options.wait_ratio``: how much to
            multiply ``2 ** (attempt - 1)`` by, in milliseconds.
        retries: Overrides ``options.retries``: maximum number of
            retries before raising ``RetryError``.
        jitter: Overrides ``options.jitter``: add full jitter to the
            wait time.
        maximum_backoff: Overrides ``options.maximum_backoff``: cap
            applied to every wait time, in milliseconds.
        log: Optional sink receiving the trace lines instead of the
            ``aretry`` logger.
        on_retry: Optional callback invoked before each backoff wait.
        on_success: Optional callback invoked when an attempt succeeds.
        on_failure: Optional callback invoked when retries are exhausted.

    Returns:
        A coroutine function ``wrapped(item=None)`` returning the
        operation's result. The resolved options are available as
        ``wrapped.options``.

    Raises:
        RetryRangeError: If an option is outside its accepted range.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aretry import retry
        >>> calls = []
        >>> async def flaky(item, attempt):
        ...     calls.append(attempt)
        ...     if attempt < 2:
        ...         raise ConnectionError("try again")
        ...     return item.upper()
        ...
        >>> wrapped = retry(flaky, wait_ratio=0)
        >>> asyncio.run(wrapped("abc"))
        'ABC'
        >>> calls
        [0, 1, 2]

        ```
    """
    resolved = (options if options is not None else RetryOptions()).merge(
        wait_ratio=wait_ratio,
        retries=retries,
        jitter=jitter,
        maximum_backoff=maximum_backoff,
    )
    executor: AsyncRetryExecutor[InputT, OutputT] = AsyncRetryExecutor(
        operation,
        resolved,
        callbacks=CallbackConfig(on_retry=on_retry, on_success=on_success, on_failure=on_failure),
        log=log,
    )

    @functools.wraps(operation, updated=())
    async def wrapped(item: InputT | None = None) -> OutputT:
        return await executor.execute(item)

    wrapped.options = resolved  # type: ignore[attr-defined]
    return wrapped
