r"""Structured logging utilities for retry diagnostics.

The retry executor writes one trace line per retry attempt and one when
the retries are exhausted. Each line carries structured fields (attempt,
wait time, jitter, ...) that ``StructuredFormatter`` renders as JSON.

Logging is opt-in. It can be configured by hand:

    ```python
    import logging
    from aretry.utils.structured_logging import StructuredFormatter

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())

    logger = logging.getLogger("aretry")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    ```

or from the environment with ``configure_logging_from_env()``:

    ```console
    ARETRY_LOG_LEVEL=DEBUG ARETRY_LOG_FORMAT=json python app.py
    ```
"""

from __future__ import annotations

__all__ = [
    "LOG_FORMAT_ENV_VAR",
    "LOG_LEVEL_ENV_VAR",
    "StructuredFormatter",
    "configure_logging_from_env",
    "log_structured",
]

import json
import logging
import os
import time
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

LOG_LEVEL_ENV_VAR = "ARETRY_LOG_LEVEL"
LOG_FORMAT_ENV_VAR = "ARETRY_LOG_FORMAT"

PLAIN_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

# Attributes every LogRecord has; anything else was added via ``extra``
_RECORD_ATTRIBUTES = frozenset(
    vars(logging.LogRecord("", logging.NOTSET, "", 0, "", (), None))
) | {"message", "asctime"}


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Standard fields in the JSON output:
        - timestamp: ISO 8601 timestamp
        - level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        - logger: Logger name
        - message: Log message
        - module: Module name where log originated
        - function: Function name where log originated
        - line: Line number where log originated

    Any additional fields added via the ``extra`` parameter in logging
    calls are included in the JSON output.

    Example:
        ```pycon
        >>> import logging
        >>> from io import StringIO
        >>> from aretry.utils.structured_logging import StructuredFormatter
        >>> stream = StringIO()
        >>> handler = logging.StreamHandler(stream)
        >>> handler.setFormatter(StructuredFormatter())
        >>> logger = logging.getLogger("test_formatter")
        >>> logger.addHandler(handler)
        >>> logger.setLevel(logging.INFO)
        >>> logger.info("attempt 1", extra={"wait_time": 100})
        >>> '"wait_time": 100' in stream.getvalue()
        True

        ```
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRIBUTES:
                log_data[key] = value

        return json.dumps(log_data, default=str)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        """Format timestamp as ISO 8601 with millisecond precision.

        ``datefmt`` is ignored.
        """
        return (
            time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
            + f".{int(record.msecs):03d}Z"
        )


def log_structured(
    logger: logging.Logger,
    level: int,
    message: str,
    **extra: Any,
) -> None:
    """Log a message with structured data.

    Args:
        logger: Logger to use.
        level: Log level (e.g., logging.DEBUG).
        message: Log message.
        **extra: Additional structured fields to include in the log.

    Example:
        ```pycon
        >>> import logging
        >>> from aretry.utils.structured_logging import log_structured
        >>> log_structured(logging.getLogger("aretry"), logging.DEBUG, "retrying", attempt=1)

        ```
    """
    logger.log(level, message, extra=extra)


def configure_logging_from_env(
    environ: Mapping[str, str] | None = None,
) -> logging.Handler | None:
    """Attach a stream handler to the ``aretry`` logger if the environment
    asks for it.

    ``ARETRY_LOG_LEVEL`` selects the level (for example ``DEBUG``). When
    it is unset or empty nothing is configured. ``ARETRY_LOG_FORMAT=json``
    selects ``StructuredFormatter``, any other value a plain text format.
    Calling this function again replaces the handler it installed before.

    Args:
        environ: The environment to read. Defaults to ``os.environ``.

    Returns:
        The installed handler, or ``None`` if logging was not configured.

    Raises:
        ValueError: If ``ARETRY_LOG_LEVEL`` is not a known level name.

    Example:
        ```pycon
        >>> from aretry.utils.structured_logging import configure_logging_from_env
        >>> configure_logging_from_env({}) is None
        True

        ```
    """
    if environ is None:
        environ = os.environ
    level_name = environ.get(LOG_LEVEL_ENV_VAR, "").strip().upper()
    if not level_name:
        return None
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        msg = f"{LOG_LEVEL_ENV_VAR} must be a logging level name, got {level_name!r}"
        raise ValueError(msg)

    handler = logging.StreamHandler()
    handler.set_name("aretry")
    if environ.get(LOG_FORMAT_ENV_VAR, "").strip().lower() == "json":
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))

    logger = logging.getLogger("aretry")
    for existing in list(logger.handlers):
        if existing.get_name() == "aretry":
            logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler
