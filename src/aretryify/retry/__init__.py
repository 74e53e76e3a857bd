r"""Retry engine implementing the class-based composition pattern.

Public API:
    - InvocationState: Per-call attempt counter
    - RetryDecider: Logic for deciding whether to retry
    - HookManager: Runner for the ``before_retry``/``on_exhausted`` hooks
    - RetryExecutor: Retry loop and operation wrapping
"""

from __future__ import annotations

__all__ = ["HookManager", "InvocationState", "RetryDecider", "RetryExecutor"]

from aretryify.retry.decider import RetryDecider
from aretryify.retry.executor import RetryExecutor
from aretryify.retry.manager import HookManager
from aretryify.retry.state import InvocationState
