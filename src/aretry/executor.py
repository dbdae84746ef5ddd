r"""Asynchronous retry executor.

This module provides the ``AsyncRetryExecutor`` class that runs the
attempt loop of a wrapped operation: wait, attempt, then either return
the result, schedule another attempt, or raise ``RetryError``.
"""

from __future__ import annotations

__all__ = ["AsyncRetryExecutor"]

import asyncio
import logging
import time
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from aretry.backoff import calculate_wait_time
from aretry.callbacks import (
    CallbackConfig,
    invoke_on_failure,
    invoke_on_retry,
    invoke_on_success,
)
from aretry.exceptions import RetryError
from aretry.state import AttemptState, RetryState
from aretry.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from aretry.config import RetryOptions

logger: logging.Logger = logging.getLogger(__name__)

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")


class AsyncRetryExecutor(Generic[InputT, OutputT]):
    """Executes an async operation with automatic retry logic.

    The executor is created once per wrapped operation and holds only
    read-only collaborators, so any number of ``execute`` calls may run
    concurrently. Every call creates its own ``AttemptState``.

    Args:
        operation: Coroutine function called as ``operation(item, attempt)``.
        options: The resolved retry options.
        callbacks: Optional lifecycle callbacks.
        log: Optional sink receiving the trace lines. Defaults to the
            module logger at DEBUG level.

    Attributes:
        operation: The wrapped coroutine function.
        options: The resolved retry options.
        callbacks: The lifecycle callbacks.
        log: The trace sink, or ``None`` to use the module logger.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aretry.config import RetryOptions
        >>> from aretry.executor import AsyncRetryExecutor
        >>> async def double(item, attempt):
        ...     return item * 2
        ...
        >>> executor = AsyncRetryExecutor(double, RetryOptions())
        >>> asyncio.run(executor.execute(21))
        42

        ```
    """

    def __init__(
        self,
        operation: Callable[[InputT, int], Awaitable[OutputT]],
        options: RetryOptions,
        callbacks: CallbackConfig | None = None,
        log: Callable[[str], None] | None = None,
    ) -> None:
        self.operation = operation
        self.options = options
        self.callbacks = callbacks if callbacks is not None else CallbackConfig()
        self.log = log

    async def execute(self, item: InputT) -> OutputT:
        """Run the operation until it succeeds or the retries are exhausted.

        The operation receives the same ``item`` on every attempt. Before
        attempt ``n > 0`` the executor waits ``calculate_wait_time(n, ...)``
        milliseconds. Only ``Exception`` subclasses are retried, so task
        cancellation propagates immediately.

        Args:
            item: The value passed to every attempt.

        Returns:
            The value returned by the first successful attempt.

        Raises:
            RetryError: If the attempt at index ``options.retries`` fails.
                The failure of that attempt is chained as the cause.
        """
        options = self.options
        state = AttemptState(max_retries=options.retries)
        start_time = time.time()

        while True:
            if state.state is RetryState.WAITING:
                await self._wait(state)

            state.begin_attempt()
            attempt_start = time.monotonic()
            try:
                result = await self.operation(item, state.attempt)
            except Exception as exc:
                if state.fail(exc) is RetryState.EXHAUSTED:
                    self._trace(f"retries ({options.retries}) exceeded", retries=options.retries)
                    error = RetryError(options, exc)
                    invoke_on_failure(
                        self.callbacks.on_failure,
                        attempt=state.attempt,
                        max_retries=options.retries,
                        error=error,
                        start_time=start_time,
                    )
                    raise error from exc
                elapsed = round((time.monotonic() - attempt_start) * 1000)
                self._trace(
                    f"attempt {state.attempt - 1} (fail in {elapsed}ms)",
                    attempt=state.attempt - 1,
                    elapsed=elapsed,
                )
                continue

            state.succeed()
            invoke_on_success(
                self.callbacks.on_success,
                attempt=state.attempt,
                max_retries=options.retries,
                result=result,
                start_time=start_time,
            )
            return result

    async def _wait(self, state: AttemptState) -> None:
        options = self.options
        wait_time = calculate_wait_time(
            attempt=state.attempt,
            wait_ratio=options.wait_ratio,
            jitter=options.jitter,
            maximum_backoff=options.maximum_backoff,
        )
        self._trace(
            f"attempt {state.attempt}, waiting for {wait_time}ms, jitter: {options.jitter}",
            attempt=state.attempt,
            wait_time=wait_time,
            jitter=options.jitter,
        )
        invoke_on_retry(
            self.callbacks.on_retry,
            attempt=state.attempt,
            max_retries=options.retries,
            wait_time=wait_time,
            jitter=options.jitter,
            error=state.last_error,
        )
        await asyncio.sleep(wait_time / 1000)

    def _trace(self, message: str, **extra: Any) -> None:
        if self.log is not None:
            self.log(message)
        else:
            log_structured(logger, logging.DEBUG, message, **extra)
