r"""Backoff wait time calculation.

This module computes how long to wait before a retry attempt using an
exponential backoff with optional full jitter and an optional cap.
"""

from __future__ import annotations

__all__ = ["calculate_wait_time", "exponential_backoff"]

import logging
import math
import random

logger: logging.Logger = logging.getLogger(__name__)


def exponential_backoff(attempt: int, wait_ratio: float) -> float:
    """Return the un-jittered, uncapped wait time before a retry.

    Args:
        attempt: The attempt about to run (0-indexed). Must be >= 1,
            the first attempt never waits.
        wait_ratio: Base multiplier in milliseconds.

    Returns:
        ``2 ** (attempt - 1) * wait_ratio`` in milliseconds.

    Example:
        ```pycon
        >>> from aretry.backoff import exponential_backoff
        >>> exponential_backoff(1, 100)
        100
        >>> exponential_backoff(4, 100)
        800

        ```
    """
    return 2 ** (attempt - 1) * wait_ratio


def calculate_wait_time(
    attempt: int,
    wait_ratio: float,
    jitter: bool,
    maximum_backoff: float = math.inf,
) -> float:
    """Calculate the wait time before a retry attempt.

    The wait time is calculated as follows:
    1. base = 2 ** (attempt - 1) * wait_ratio
    2. With jitter, draw the wait uniformly in [0, base] ("full jitter")
       and round it up to a whole millisecond. Without jitter the wait
       is base.
    3. Cap the result at maximum_backoff. The jitter range always comes
       from the uncapped base.

    Args:
        attempt: The attempt about to run (0-indexed). Must be >= 1.
        wait_ratio: Base multiplier in milliseconds.
        jitter: Whether to apply full jitter.
        maximum_backoff: Upper bound for the returned value, in
            milliseconds.

    Returns:
        The wait time in milliseconds.

    Example:
        ```pycon
        >>> from aretry.backoff import calculate_wait_time
        >>> calculate_wait_time(attempt=1, wait_ratio=100, jitter=False)
        100
        >>> calculate_wait_time(attempt=3, wait_ratio=100, jitter=False)
        400
        >>> calculate_wait_time(attempt=3, wait_ratio=100, jitter=False, maximum_backoff=250)
        250
        >>> 0 <= calculate_wait_time(attempt=3, wait_ratio=100, jitter=True) <= 400
        True

        ```
    """
    base = exponential_backoff(attempt, wait_ratio)
    if jitter:
        wait_time = math.ceil(random.random() * base)  # noqa: S311
    else:
        wait_time = base

    if wait_time > maximum_backoff:
        logger.debug(f"Capping wait time from {wait_time}ms to {maximum_backoff}ms")
        wait_time = maximum_backoff
    return wait_time
