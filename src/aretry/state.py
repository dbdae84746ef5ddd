r"""Per-invocation retry state machine.

Each call of a wrapped operation owns one ``AttemptState``. The state
moves through the following transitions and is discarded once the call
settles:

    INITIAL -> ATTEMPTING
    ATTEMPTING -> SUCCEEDED | WAITING | EXHAUSTED
    WAITING -> ATTEMPTING
"""

from __future__ import annotations

__all__ = ["AttemptState", "RetryState"]

from dataclasses import dataclass
from enum import Enum


class RetryState(Enum):
    """States of a single retry sequence."""

    INITIAL = "initial"
    WAITING = "waiting"
    ATTEMPTING = "attempting"
    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted"


_TRANSITIONS: dict[RetryState, frozenset[RetryState]] = {
    RetryState.INITIAL: frozenset({RetryState.ATTEMPTING}),
    RetryState.WAITING: frozenset({RetryState.ATTEMPTING}),
    RetryState.ATTEMPTING: frozenset(
        {RetryState.SUCCEEDED, RetryState.WAITING, RetryState.EXHAUSTED}
    ),
    RetryState.SUCCEEDED: frozenset(),
    RetryState.EXHAUSTED: frozenset(),
}


@dataclass
class AttemptState:
    """Mutable state of one retry sequence.

    Attributes:
        max_retries: Maximum number of retries after the first attempt.
        attempt: The current attempt index (0-indexed).
        state: The current state.
        last_error: The exception raised by the latest failed attempt.

    Example:
        ```pycon
        >>> from aretry.state import AttemptState, RetryState
        >>> state = AttemptState(max_retries=1)
        >>> state.begin_attempt()
        >>> state.fail(ValueError("boom"))
        <RetryState.WAITING: 'waiting'>
        >>> state.attempt
        1
        >>> state.begin_attempt()
        >>> state.fail(ValueError("boom"))
        <RetryState.EXHAUSTED: 'exhausted'>

        ```
    """

    max_retries: int
    attempt: int = 0
    state: RetryState = RetryState.INITIAL
    last_error: Exception | None = None

    @property
    def is_settled(self) -> bool:
        """Whether the sequence has reached a terminal state."""
        return self.state in (RetryState.SUCCEEDED, RetryState.EXHAUSTED)

    def begin_attempt(self) -> None:
        """Mark the current attempt as running."""
        self._transition(RetryState.ATTEMPTING)

    def succeed(self) -> None:
        """Mark the current attempt as successful."""
        self._transition(RetryState.SUCCEEDED)

    def fail(self, error: Exception) -> RetryState:
        """Record the failure of the current attempt.

        The attempt counter is incremented unless the retry budget is
        exhausted.

        Args:
            error: The exception raised by the current attempt.

        Returns:
            ``RetryState.WAITING`` if another attempt follows, otherwise
            ``RetryState.EXHAUSTED``.
        """
        self.last_error = error
        if self.attempt >= self.max_retries:
            self._transition(RetryState.EXHAUSTED)
        else:
            self._transition(RetryState.WAITING)
            self.attempt += 1
        return self.state

    def _transition(self, target: RetryState) -> None:
        if target not in _TRANSITIONS[self.state]:
            msg = f"invalid retry state transition: {self.state.name} -> {target.name}"
            raise RuntimeError(msg)
        self.state = target
