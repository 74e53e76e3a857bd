r"""Fibonacci backoff strategy."""

from __future__ import annotations

__all__ = ["FibonacciBackoff"]

from aretryify.backoff.base import BaseBackoffStrategy, cap_delay, check_delays


class FibonacciBackoff(BaseBackoffStrategy):
    """Fibonacci backoff strategy.

    Calculates delay as: base_delay * fib(attempt), where the sequence is
    1, 1, 2, 3, 5, 8, ... It grows slower than exponential backoff.

    Args:
        base_delay: The base delay in seconds (default: 1.0).
        max_delay: Optional maximum delay cap in seconds.

    Example:
        ```pycon
        >>> from aretryify.backoff import FibonacciBackoff
        >>> backoff = FibonacciBackoff(base_delay=1.0)
        >>> [backoff(attempt) for attempt in range(1, 7)]
        [1.0, 1.0, 2.0, 3.0, 5.0, 8.0]
        >>> FibonacciBackoff(base_delay=1.0, max_delay=10.0)(11)
        10.0

        ```
    """

    def __init__(self, base_delay: float = 1.0, max_delay: float | None = None) -> None:
        check_delays(base_delay, max_delay)
        self.base_delay = base_delay
        self.max_delay = max_delay

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(base_delay={self.base_delay}, "
            f"max_delay={self.max_delay})"
        )

    @staticmethod
    def _fibonacci(n: int) -> int:
        previous, current = 0, 1
        for _ in range(max(n, 0)):
            previous, current = current, previous + current
        return previous

    def calculate(self, attempt: int) -> float:
        return cap_delay(self.base_delay * self._fibonacci(attempt), self.max_delay)
