r"""Constant backoff strategy."""

from __future__ import annotations

__all__ = ["ConstantBackoff"]

from aretryify.backoff.base import BaseBackoffStrategy
from aretryify.config import DEFAULT_RETRY_DELAY


class ConstantBackoff(BaseBackoffStrategy):
    """Constant backoff strategy.

    Waits the same time before every retry. This is the default
    ``retry_delay`` of a ``RetryPolicy``.

    Args:
        delay: The delay in seconds before each retry (default: 0.5).

    Example:
        ```pycon
        >>> from aretryify.backoff import ConstantBackoff
        >>> backoff = ConstantBackoff(delay=2.5)
        >>> backoff(1)
        2.5
        >>> backoff(10)
        2.5

        ```
    """

    def __init__(self, delay: float = DEFAULT_RETRY_DELAY) -> None:
        if delay < 0:
            msg = f"delay must be non-negative, got {delay}"
            raise ValueError(msg)

        self.delay = delay

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(delay={self.delay})"

    def calculate(self, attempt: int) -> float:  # noqa: ARG002
        return self.delay
