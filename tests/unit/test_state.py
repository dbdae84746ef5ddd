from __future__ import annotations

import pytest

from aretry.state import AttemptState, RetryState

##################################
#     Tests for AttemptState     #
##################################


def test_attempt_state_initial() -> None:
    state = AttemptState(max_retries=3)
    assert state.attempt == 0
    assert state.state is RetryState.INITIAL
    assert state.last_error is None
    assert not state.is_settled


def test_attempt_state_success_on_first_attempt() -> None:
    state = AttemptState(max_retries=3)
    state.begin_attempt()
    assert state.state is RetryState.ATTEMPTING
    state.succeed()
    assert state.state is RetryState.SUCCEEDED
    assert state.attempt == 0
    assert state.is_settled


def test_attempt_state_failure_then_retry() -> None:
    state = AttemptState(max_retries=2)
    error = ValueError("boom")
    state.begin_attempt()
    assert state.fail(error) is RetryState.WAITING
    assert state.attempt == 1
    assert state.last_error is error
    assert not state.is_settled
    state.begin_attempt()
    state.succeed()
    assert state.attempt == 1


@pytest.mark.parametrize("max_retries", [0, 1, 5])
def test_attempt_state_exhausted_after_max_retries(max_retries: int) -> None:
    state = AttemptState(max_retries=max_retries)
    errors = [ValueError(str(i)) for i in range(max_retries + 1)]
    for error in errors[:-1]:
        state.begin_attempt()
        assert state.fail(error) is RetryState.WAITING
    state.begin_attempt()
    assert state.fail(errors[-1]) is RetryState.EXHAUSTED
    assert state.attempt == max_retries
    assert state.last_error is errors[-1]
    assert state.is_settled


def test_attempt_state_zero_retries_exhausts_immediately() -> None:
    state = AttemptState(max_retries=0)
    state.begin_attempt()
    assert state.fail(RuntimeError()) is RetryState.EXHAUSTED
    assert state.attempt == 0


def test_attempt_state_cannot_succeed_before_attempt() -> None:
    with pytest.raises(RuntimeError, match=r"INITIAL -> SUCCEEDED"):
        AttemptState(max_retries=1).succeed()


def test_attempt_state_cannot_fail_while_waiting() -> None:
    state = AttemptState(max_retries=3)
    state.begin_attempt()
    state.fail(ValueError())
    with pytest.raises(RuntimeError, match=r"WAITING -> WAITING"):
        state.fail(ValueError())


def test_attempt_state_cannot_attempt_after_settled() -> None:
    state = AttemptState(max_retries=0)
    state.begin_attempt()
    state.succeed()
    with pytest.raises(RuntimeError, match=r"SUCCEEDED -> ATTEMPTING"):
        state.begin_attempt()
