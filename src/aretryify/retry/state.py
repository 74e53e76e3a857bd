r"""Per-call retry bookkeeping."""

from __future__ import annotations

__all__ = ["InvocationState"]

from dataclasses import dataclass


@dataclass
class InvocationState:
    """Mutable state of one call to a decorated operation.

    A new instance is created for every top-level call and passed along
    the retry loop of that call only, so concurrent calls to the same
    decorated operation never share their attempt counters.

    Attributes:
        attempts_used: Number of retries already started by the call.

    Example:
        ```pycon
        >>> from aretryify.retry import InvocationState
        >>> state = InvocationState()
        >>> state.attempts_used
        0
        >>> state.next_attempt()
        1

        ```
    """

    attempts_used: int = 0

    def next_attempt(self) -> int:
        """Count one more retry and return its 1-indexed number."""
        self.attempts_used += 1
        return self.attempts_used
