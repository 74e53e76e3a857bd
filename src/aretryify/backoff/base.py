r"""Abstract base class for backoff strategies."""

from __future__ import annotations

__all__ = ["BaseBackoffStrategy"]

from abc import ABC, abstractmethod


class BaseBackoffStrategy(ABC):
    """Abstract base class for backoff strategies.

    A backoff strategy maps the retry number to the time to wait before
    that retry. Instances are callable so they can be used wherever a
    ``retry_delay(attempt)`` function is expected.
    """

    def __call__(self, attempt: int) -> float:
        return self.calculate(attempt)

    @abstractmethod
    def calculate(self, attempt: int) -> float:
        """Calculate the delay before a given retry.

        Args:
            attempt: The retry number (1-indexed). For example,
                attempt=1 is the first retry, attempt=2 is the second
                retry, etc.

        Returns:
            The delay in seconds before the retry.
        """


def check_delays(base_delay: float, max_delay: float | None) -> None:
    r"""Check the delay parameters shared by the growing strategies.

    Args:
        base_delay: The base delay in seconds. Must be >= 0.
        max_delay: Optional cap in seconds. Must be > 0 if provided.

    Raises:
        ValueError: If one of the parameters is out of range.
    """
    if base_delay < 0:
        msg = f"base_delay must be non-negative, got {base_delay}"
        raise ValueError(msg)
    if max_delay is not None and max_delay <= 0:
        msg = f"max_delay must be positive if specified, got {max_delay}"
        raise ValueError(msg)


def cap_delay(delay: float, max_delay: float | None) -> float:
    r"""Return ``delay`` limited to ``max_delay`` when a cap is set."""
    if max_delay is not None:
        return min(delay, max_delay)
    return delay
