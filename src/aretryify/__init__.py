r"""aretryify - Transparent retries for asynchronous operations.

This package decorates a single callable, or every operation of an
object, so that failed asynchronous calls are retried according to a
configurable policy. The decorated surface is used exactly like the
original one.

Key Features:
    - Decoration of a callable, a mapping of callables, or an object
      (inherited methods included)
    - Per-call retry state: concurrent calls never share a retry budget
    - Custom retry predicate and retry ceiling (including unbounded)
    - Backoff strategies: Constant, Linear, Exponential, Fibonacci, or
      any ``retry_delay(attempt)`` function
    - ``before_retry`` hook to repair the cause of a failure, e.g.
      refresh an access token
    - ``on_exhausted`` notification when a call gives up

Example:
    ```pycon
    >>> from aretryify import retryify
    >>> from aretryify.backoff import ExponentialBackoff
    >>> client = retryify(
    ...     api_client,
    ...     max_retries=1,
    ...     should_retry=lambda error: getattr(error, "status_code", None) == 401,
    ...     before_retry=lambda attempt, args, kwargs: api_client.refresh_token(),
    ...     retry_delay=ExponentialBackoff(base_delay=0.1),
    ...     member_selector=lambda name: not name.startswith("_"),
    ... )  # doctest: +SKIP
    >>> playlist = await client.get_playlist("abc")  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_RETRY_DELAY",
    "ConstantBackoff",
    "ExponentialBackoff",
    "FibonacciBackoff",
    "InvocationState",
    "LinearBackoff",
    "RetryExecutor",
    "RetryPolicy",
    "RetryingProxy",
    "__version__",
    "retryify",
]

from importlib.metadata import PackageNotFoundError, version

from aretryify.backoff import (
    ConstantBackoff,
    ExponentialBackoff,
    FibonacciBackoff,
    LinearBackoff,
)
from aretryify.config import DEFAULT_MAX_RETRIES, DEFAULT_RETRY_DELAY
from aretryify.factory import RetryingProxy, retryify
from aretryify.policy import RetryPolicy
from aretryify.retry import InvocationState, RetryExecutor

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
