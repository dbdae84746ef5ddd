r"""Configuration dataclass and defaults for the retry wrapper.

This module provides the default values of the retry options and the
immutable ``RetryOptions`` dataclass that is resolved once per call to
``retry()`` and then shared, read-only, by every invocation of the
wrapped operation.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_JITTER",
    "DEFAULT_MAXIMUM_BACKOFF",
    "DEFAULT_RETRIES",
    "DEFAULT_WAIT_RATIO",
    "MAXIMUM_RETRIES",
    "MAXIMUM_WAIT_RATIO",
    "MINIMUM_RETRIES",
    "MINIMUM_WAIT_RATIO",
    "RetryOptions",
]

import math
from dataclasses import dataclass, replace
from typing import Any

from aretry.validation import (
    MAXIMUM_RETRIES,
    MAXIMUM_WAIT_RATIO,
    MINIMUM_RETRIES,
    MINIMUM_WAIT_RATIO,
    validate_retry_options,
)

# Base multiplier for the exponential backoff, in milliseconds
# Wait time before retry n = 2 ** (n - 1) * wait_ratio
# With 100: 1st retry waits up to 100ms, 2nd up to 200ms, 3rd up to 400ms
DEFAULT_WAIT_RATIO = 100

# Default maximum number of retries
# Total attempts = retries + 1 (initial attempt)
DEFAULT_RETRIES = 8

# Full jitter is enabled by default
DEFAULT_JITTER = True

# Wait times are not capped by default
DEFAULT_MAXIMUM_BACKOFF = math.inf


@dataclass(frozen=True)
class RetryOptions:
    """Options controlling how a wrapped operation is retried.

    Args:
        wait_ratio: Base multiplier for the exponential backoff, in
            milliseconds. Must be >= 0 and <= 60000.
        retries: Maximum number of retries after the first attempt.
            Must be >= 0 and <= 64.
        jitter: Whether the wait time is drawn uniformly between zero and
            the exponential value (full jitter).
        maximum_backoff: Upper bound applied to every computed wait time,
            in milliseconds. Must be >= 0. Defaults to no cap.

    Raises:
        RetryRangeError: If any option is outside its accepted range.

    Example:
        ```pycon
        >>> from aretry.config import RetryOptions
        >>> options = RetryOptions()
        >>> options.retries
        8
        >>> options = RetryOptions(wait_ratio=10, jitter=False)
        >>> options.wait_ratio
        10
        >>> options.merge(retries=2).retries
        2
        >>> options.retries  # Original unchanged
        8

        ```
    """

    wait_ratio: float = DEFAULT_WAIT_RATIO
    retries: int = DEFAULT_RETRIES
    jitter: bool = DEFAULT_JITTER
    maximum_backoff: float = DEFAULT_MAXIMUM_BACKOFF

    def __post_init__(self) -> None:
        validate_retry_options(
            wait_ratio=self.wait_ratio,
            retries=self.retries,
            maximum_backoff=self.maximum_backoff,
        )

    def merge(self, **overrides: Any) -> RetryOptions:
        """Create new options with the specified fields overridden.

        Only non-None override values are applied. The returned instance
        is validated like any other.

        Args:
            **overrides: Keyword arguments for the fields to override.

        Returns:
            A new ``RetryOptions`` instance with overrides applied.

        Raises:
            TypeError: If an override does not name a field.
            RetryRangeError: If an override is outside its accepted range.

        Example:
            ```pycon
            >>> from aretry.config import RetryOptions
            >>> options = RetryOptions(retries=3)
            >>> options.merge(retries=5, jitter=None)
            RetryOptions(wait_ratio=100, retries=5, jitter=True, maximum_backoff=inf)

            ```
        """
        changes = {key: value for key, value in overrides.items() if value is not None}
        if not changes:
            return self
        return replace(self, **changes)
