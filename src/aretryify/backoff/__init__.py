r"""Backoff strategies usable as ``retry_delay`` callables.

Every strategy maps the 1-indexed retry number to a delay in seconds
and can be passed directly as the ``retry_delay`` field of a
``RetryPolicy``.
"""

from __future__ import annotations

__all__ = [
    "BaseBackoffStrategy",
    "ConstantBackoff",
    "ExponentialBackoff",
    "FibonacciBackoff",
    "LinearBackoff",
]

from aretryify.backoff.base import BaseBackoffStrategy
from aretryify.backoff.constant import ConstantBackoff
from aretryify.backoff.exponential import ExponentialBackoff
from aretryify.backoff.fibonacci import FibonacciBackoff
from aretryify.backoff.linear import LinearBackoff
