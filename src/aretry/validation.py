r"""Range validation for retry options.

The checks in this module run once, when a retry wrapper is created, so
that a bad configuration fails before any operation is scheduled.
"""

from __future__ import annotations

__all__ = ["validate_retry_options"]

from aretry.exceptions import RetryRangeError

MINIMUM_WAIT_RATIO = 0
MAXIMUM_WAIT_RATIO = 60_000

MINIMUM_RETRIES = 0
MAXIMUM_RETRIES = 64

MINIMUM_MAXIMUM_BACKOFF = 0


def validate_retry_options(
    wait_ratio: float,
    retries: int,
    maximum_backoff: float,
) -> None:
    """Validate retry options.

    Args:
        wait_ratio: Base multiplier for the exponential backoff, in
            milliseconds. Must be >= 0 and <= 60000.
        retries: Maximum number of retries after the first attempt.
            Must be >= 0 and <= 64.
        maximum_backoff: Upper bound applied to every computed wait
            time, in milliseconds. Must be >= 0.

    Raises:
        RetryRangeError: If any option is outside its accepted range.

    Example:
        ```pycon
        >>> from aretry.validation import validate_retry_options
        >>> validate_retry_options(wait_ratio=100, retries=8, maximum_backoff=float("inf"))
        >>> validate_retry_options(wait_ratio=-1, retries=8, maximum_backoff=0)
        Traceback (most recent call last):
        ...
        aretry.exceptions.RetryRangeError: wait_ratio must be >= 0 and <= 60000

        ```
    """
    if not MINIMUM_WAIT_RATIO <= wait_ratio <= MAXIMUM_WAIT_RATIO:
        msg = f"wait_ratio must be >= {MINIMUM_WAIT_RATIO} and <= {MAXIMUM_WAIT_RATIO}"
        raise RetryRangeError(msg)
    if not MINIMUM_RETRIES <= retries <= MAXIMUM_RETRIES:
        msg = f"retries must be >= {MINIMUM_RETRIES} and <= {MAXIMUM_RETRIES}"
        raise RetryRangeError(msg)
    if not maximum_backoff >= MINIMUM_MAXIMUM_BACKOFF:
        msg = f"maximum_backoff must be >= {MINIMUM_MAXIMUM_BACKOFF}"
        raise RetryRangeError(msg)
