r"""Exceptions raised by the retry wrapper.

This module defines the configuration error raised when a retry wrapper
is created with out-of-range options, and the terminal error raised once
a wrapped operation has exhausted its retry budget.
"""

from __future__ import annotations

__all__ = ["RetryError", "RetryRangeError"]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from aretry.config import RetryOptions


class RetryRangeError(ValueError):
    """Raised when a retry option is outside its accepted range.

    This error is raised synchronously when the retry wrapper is created,
    never while an operation is being retried.

    Example:
        ```pycon
        >>> from aretry import RetryOptions, RetryRangeError
        >>> try:
        ...     RetryOptions(retries=65)
        ... except RetryRangeError as exc:
        ...     print(exc)
        ...
        retries must be >= 0 and <= 64

        ```
    """


class RetryError(Exception):
    """Raised when a wrapped operation fails more times than allowed.

    Only the failure of the final attempt is kept. It is available as
    ``last_error`` and is also chained as ``__cause__`` when the error is
    raised by the retry executor.

    Args:
        options: The resolved retry options used for the run.
        last_error: The exception raised by the final attempt.

    Attributes:
        options: The resolved retry options used for the run.
        last_error: The exception raised by the final attempt.

    Example:
        ```pycon
        >>> from aretry import RetryError, RetryOptions
        >>> error = RetryError(RetryOptions(retries=2), ValueError("boom"))
        >>> str(error)
        'Maximum retries (2) exceeded'
        >>> error.retries
        2
        >>> error.last_error
        ValueError('boom')

        ```
    """

    def __init__(self, options: RetryOptions, last_error: Exception) -> None:
        super().__init__(f"Maximum retries ({options.retries}) exceeded")
        self.options = options
        self.last_error = last_error

    @property
    def retries(self) -> int:
        """The configured maximum number of retries."""
        return self.options.retries

    def __reduce__(self) -> tuple:
        return (self.__class__, (self.options, self.last_error))
