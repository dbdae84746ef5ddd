from __future__ import annotations

import json
import logging
from io import StringIO
from typing import TYPE_CHECKING

import pytest

from aretry.utils.structured_logging import (
    LOG_FORMAT_ENV_VAR,
    LOG_LEVEL_ENV_VAR,
    StructuredFormatter,
    configure_logging_from_env,
    log_structured,
)

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def aretry_logger() -> Generator[logging.Logger, None, None]:
    """Restore the aretry logger after each test."""
    logger = logging.getLogger("aretry")
    handlers, level = list(logger.handlers), logger.level
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)


def _make_logger(name: str) -> tuple[logging.Logger, StringIO]:
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    logger = logging.getLogger(name)
    logger.handlers = [handler]
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    return logger, stream


#########################################
#     Tests for StructuredFormatter     #
#########################################


def test_structured_formatter_basic_log() -> None:
    """Test that StructuredFormatter produces valid JSON."""
    logger, stream = _make_logger("test_structured_basic")
    logger.info("Test message")

    log_data = json.loads(stream.getvalue())
    assert log_data["message"] == "Test message"
    assert log_data["level"] == "INFO"
    assert log_data["logger"] == "test_structured_basic"
    assert log_data["timestamp"].endswith("Z")
    assert {"module", "function", "line"} <= set(log_data)


def test_structured_formatter_extra_fields() -> None:
    logger, stream = _make_logger("test_structured_extra")
    logger.debug("attempt 1, waiting for 100ms", extra={"attempt": 1, "wait_time": 100})

    log_data = json.loads(stream.getvalue())
    assert log_data["attempt"] == 1
    assert log_data["wait_time"] == 100
    assert "args" not in log_data
    assert "msg" not in log_data


def test_structured_formatter_non_serializable_extra() -> None:
    logger, stream = _make_logger("test_structured_repr")
    logger.info("failed", extra={"error": ValueError("boom")})
    assert json.loads(stream.getvalue())["error"] == "boom"


def test_structured_formatter_exception() -> None:
    logger, stream = _make_logger("test_structured_exception")
    try:
        msg = "boom"
        raise RuntimeError(msg)
    except RuntimeError:
        logger.exception("operation failed")

    log_data = json.loads(stream.getvalue())
    assert "RuntimeError: boom" in log_data["exception"]


####################################
#     Tests for log_structured     #
####################################


def test_log_structured() -> None:
    logger, stream = _make_logger("test_log_structured")
    log_structured(logger, logging.DEBUG, "retries (3) exceeded", retries=3)

    log_data = json.loads(stream.getvalue())
    assert log_data["message"] == "retries (3) exceeded"
    assert log_data["level"] == "DEBUG"
    assert log_data["retries"] == 3


def test_log_structured_respects_level() -> None:
    logger, stream = _make_logger("test_log_structured_level")
    logger.setLevel(logging.INFO)
    log_structured(logger, logging.DEBUG, "hidden", attempt=1)
    assert stream.getvalue() == ""


################################################
#     Tests for configure_logging_from_env     #
################################################


def test_configure_logging_from_env_unset(aretry_logger: logging.Logger) -> None:
    handlers = list(aretry_logger.handlers)
    assert configure_logging_from_env({}) is None
    assert configure_logging_from_env({LOG_LEVEL_ENV_VAR: ""}) is None
    assert aretry_logger.handlers == handlers


def test_configure_logging_from_env_plain(aretry_logger: logging.Logger) -> None:
    handler = configure_logging_from_env({LOG_LEVEL_ENV_VAR: "debug"})
    assert handler in aretry_logger.handlers
    assert aretry_logger.level == logging.DEBUG
    assert not isinstance(handler.formatter, StructuredFormatter)


def test_configure_logging_from_env_json(aretry_logger: logging.Logger) -> None:
    handler = configure_logging_from_env(
        {LOG_LEVEL_ENV_VAR: "INFO", LOG_FORMAT_ENV_VAR: "JSON"}
    )
    assert isinstance(handler.formatter, StructuredFormatter)
    assert aretry_logger.level == logging.INFO


def test_configure_logging_from_env_replaces_handler(aretry_logger: logging.Logger) -> None:
    first = configure_logging_from_env({LOG_LEVEL_ENV_VAR: "DEBUG"})
    second = configure_logging_from_env({LOG_LEVEL_ENV_VAR: "DEBUG"})
    assert first not in aretry_logger.handlers
    assert second in aretry_logger.handlers


def test_configure_logging_from_env_invalid_level(aretry_logger: logging.Logger) -> None:
    with pytest.raises(ValueError, match=r"ARETRY_LOG_LEVEL must be a logging level name"):
        configure_logging_from_env({LOG_LEVEL_ENV_VAR: "LOUD"})


def test_configure_logging_from_env_reads_os_environ(
    aretry_logger: logging.Logger, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "WARNING")
    assert configure_logging_from_env() is not None
    assert aretry_logger.level == logging.WARNING
