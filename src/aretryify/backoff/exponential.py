r"""Exponential backoff strategy."""

from __future__ import annotations

__all__ = ["ExponentialBackoff"]

from aretryify.backoff.base import BaseBackoffStrategy, cap_delay, check_delays


class ExponentialBackoff(BaseBackoffStrategy):
    """Exponential backoff strategy.

    Calculates delay as: base_delay * (2 ** (attempt - 1)), with optional
    max_delay cap. The first retry waits exactly ``base_delay``.

    Args:
        base_delay: The delay in seconds before the first retry
            (default: 0.3).
        max_delay: Optional maximum delay cap in seconds.

    Example:
        ```pycon
        >>> from aretryify.backoff import ExponentialBackoff
        >>> backoff = ExponentialBackoff(base_delay=0.3)
        >>> backoff(1)
        0.3
        >>> backoff(2)
        0.6
        >>> backoff(3)
        1.2
        >>> ExponentialBackoff(base_delay=1.0, max_delay=5.0)(11)
        5.0

        ```
    """

    def __init__(self, base_delay: float = 0.3, max_delay: float | None = None) -> None:
        check_delays(base_delay, max_delay)
        self.base_delay = base_delay
        self.max_delay = max_delay

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(base_delay={self.base_delay}, "
            f"max_delay={self.max_delay})"
        )

    def calculate(self, attempt: int) -> float:
        """Calculate exponential backoff delay.

        Args:
            attempt: The retry number (1-indexed).

        Returns:
            ``base_delay * 2 ** (attempt - 1)``, capped at ``max_delay``
            if set.
        """
        return cap_delay(self.base_delay * (2 ** (attempt - 1)), self.max_delay)
