r"""aretry - Retry asynchronous operations with exponential backoff.

This package wraps a fallible coroutine function with automatic retry
using exponential backoff, optional full jitter and an optional backoff
cap. Once the retry budget is exhausted, a ``RetryError`` is raised that
keeps the resolved options and the last failure.

Key Features:
    - Exponential backoff: 2 ** (attempt - 1) * wait_ratio milliseconds
    - Full jitter to avoid synchronized retry storms
    - Optional cap on every wait time
    - Options validated once, when the wrapper is created
    - Independent retry sequence per call, safe under ``asyncio.gather``
    - Lifecycle callbacks and structured logging for observability

Example:
    ```pycon
    >>> import asyncio
    >>> from aretry import retry
    >>> async def fetch(item, attempt):
    ...     return f"{item} on attempt {attempt}"
    ...
    >>> wrapped = retry(fetch, retries=3, wait_ratio=50, maximum_backoff=1000)
    >>> asyncio.run(wrapped("payload"))
    'payload on attempt 0'

    ```
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_JITTER",
    "DEFAULT_MAXIMUM_BACKOFF",
    "DEFAULT_RETRIES",
    "DEFAULT_WAIT_RATIO",
    "RetryError",
    "RetryOptions",
    "RetryRangeError",
    "__version__",
    "retry",
]

from importlib.metadata import PackageNotFoundError, version

from aretry.config import (
    DEFAULT_JITTER,
    DEFAULT_MAXIMUM_BACKOFF,
    DEFAULT_RETRIES,
    DEFAULT_WAIT_RATIO,
    RetryOptions,
)
from aretry.exceptions import RetryError, RetryRangeError
from aretry.retry import retry

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
