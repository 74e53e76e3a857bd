r"""Retry decision logic.

This module provides the ``RetryDecider`` class that decides whether a
failed attempt should be retried, from the user predicate and the retry
ceiling.
"""

from __future__ import annotations

__all__ = ["RetryDecider"]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretryify.retry.state import InvocationState


class RetryDecider:
    """Decides whether a failed attempt should be retried.

    Args:
        should_retry: Synchronous predicate on the raised exception.
        max_retries: Retry ceiling, possibly ``math.inf``.
    """

    def __init__(self, should_retry: Callable[[Exception], bool], max_retries: float) -> None:
        self.should_retry = should_retry
        self.max_retries = max_retries

    def decide(self, error: Exception, state: InvocationState) -> tuple[bool, str]:
        """Determine if the failure should trigger a retry.

        The predicate is evaluated before the ceiling is checked, so it
        sees every failure, including the last one. An exception raised by
        the predicate propagates to the caller.

        Args:
            error: The exception raised by the failed attempt.
            state: The state of the call that failed.

        Returns:
            Tuple of (should_retry, reason).

        Example:
            ```pycon
            >>> from aretryify.retry import InvocationState, RetryDecider
            >>> decider = RetryDecider(lambda error: True, max_retries=1)
            >>> decider.decide(ValueError(), InvocationState())
            (True, 'ValueError')
            >>> decider.decide(ValueError(), InvocationState(attempts_used=1))
            (False, 'max retries exhausted')

            ```
        """
        max_retries_reached = state.attempts_used >= self.max_retries
        if not self.should_retry(error):
            return (False, "should_retry returned False")
        if max_retries_reached:
            return (False, "max retries exhausted")
        return (True, type(error).__name__)
