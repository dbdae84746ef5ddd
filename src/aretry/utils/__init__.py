r"""Utility functions for the retry wrapper."""

from __future__ import annotations

__all__ = ["StructuredFormatter", "configure_logging_from_env", "log_structured"]

from aretry.utils.structured_logging import (
    StructuredFormatter,
    configure_logging_from_env,
    log_structured,
)
