r"""Shared test helpers for retry tests."""

from __future__ import annotations

from typing import Any


class FlakyOperation:
    """Async operation that fails a fixed number of times, then echoes
    its input.

    Args:
        failures: Number of attempts that raise before the first success.
            Use ``float("inf")`` for an operation that never succeeds.

    Attributes:
        attempts: The attempt indices received, in call order.
        items: The items received, in call order.
        errors: The exceptions raised, in call order.
    """

    def __init__(self, failures: float = 0) -> None:
        self.failures = failures
        self.attempts: list[int] = []
        self.items: list[Any] = []
        self.errors: list[Exception] = []

    @property
    def call_count(self) -> int:
        return len(self.attempts)

    async def __call__(self, item: Any, attempt: int) -> Any:
        assert attempt == len(self.errors)
        self.attempts.append(attempt)
        self.items.append(item)
        if len(self.errors) < self.failures:
            error = RuntimeError(f"Error {len(self.errors) + 1}/{self.failures}")
            self.errors.append(error)
            raise error
        return item
