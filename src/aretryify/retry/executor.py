r"""Retry executor for asynchronous operations.

This module provides the ``RetryExecutor`` class that turns one
operation into a decorated operation with the same call contract and
the retry semantics of a ``RetryPolicy``.
"""

from __future__ import annotations

__all__ = ["RetryExecutor"]

import asyncio
import functools
import inspect
import logging
from typing import TYPE_CHECKING, Any

from aretryify.retry.decider import RetryDecider
from aretryify.retry.manager import HookManager
from aretryify.retry.state import InvocationState
from aretryify.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from aretryify.policy import RetryPolicy

logger: logging.Logger = logging.getLogger(__name__)


def operation_name(operation: Callable[..., Any]) -> str:
    r"""Return a readable name of an operation for log messages."""
    return getattr(operation, "__qualname__", None) or repr(operation)


class RetryExecutor:
    """Applies a retry policy to asynchronous operations.

    The executor is built once per policy and can wrap any number of
    operations. It holds no per-call state: every call of a decorated
    operation creates its own ``InvocationState``, so concurrent calls
    have independent retry budgets.

    The executor orchestrates the following components:
    - RetryDecider: Decides whether a failure is retried
    - HookManager: Runs ``before_retry`` and dispatches ``on_exhausted``

    Args:
        policy: The resolved retry policy.

    Attributes:
        policy: The resolved retry policy.
        decider: Logic for deciding whether to retry.
        hooks: Manager for the user hooks.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aretryify import RetryPolicy
        >>> from aretryify.retry import RetryExecutor
        >>> calls = []
        >>> async def flaky():
        ...     calls.append(1)
        ...     if len(calls) < 3:
        ...         raise ConnectionError("boom")
        ...     return "ok"
        ...
        >>> executor = RetryExecutor(RetryPolicy(retry_delay=lambda attempt: 0.0))
        >>> asyncio.run(executor.wrap(flaky)())
        'ok'
        >>> len(calls)
        3

        ```
    """

    def __init__(self, policy: RetryPolicy) -> None:
        self.policy = policy
        self.decider: RetryDecider = RetryDecider(policy.should_retry, policy.max_retries)
        self.hooks: HookManager = HookManager(policy.before_retry, policy.on_exhausted)

    def wrap(self, operation: Callable[..., Any]) -> Callable[..., Any]:
        """Create the decorated version of an operation.

        A coroutine function is wrapped into a coroutine function. Any
        other callable is wrapped into a plain function which returns
        synchronous results unchanged and returns a coroutine when the
        operation returned an awaitable. In both cases the wrapper keeps
        the name, docstring and signature of the operation.

        Args:
            operation: The operation to decorate. Bound methods keep their
                receiver.

        Returns:
            The decorated operation.
        """
        if inspect.iscoroutinefunction(operation):

            @functools.wraps(operation)
            async def decorated_coroutine_function(*args: Any, **kwargs: Any) -> Any:
                return await self.execute(operation, *args, **kwargs)

            return decorated_coroutine_function

        @functools.wraps(operation)
        def decorated(*args: Any, **kwargs: Any) -> Any:
            state = InvocationState()
            result = operation(*args, **kwargs)
            if not inspect.isawaitable(result):
                return result
            return self._retry(operation, result, state, args, kwargs)

        return decorated

    async def execute(self, operation: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Any:
        """Call an operation and retry it according to the policy.

        Args:
            operation: The operation to call.
            *args: Positional arguments passed to every attempt.
            **kwargs: Keyword arguments passed to every attempt.

        Returns:
            The result of the first successful attempt, or the value
            returned directly if an attempt produced a synchronous result.

        Raises:
            Exception: The exception of the last failed attempt, unchanged,
                or the exception raised by ``before_retry``,
                ``should_retry`` or ``retry_delay``.
        """
        state = InvocationState()
        result = operation(*args, **kwargs)
        if not inspect.isawaitable(result):
            return result
        return await self._retry(operation, result, state, args, kwargs)

    async def _retry(
        self,
        operation: Callable[..., Any],
        awaitable: Awaitable[Any],
        state: InvocationState,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Any:
        name = operation_name(operation)
        while True:
            try:
                return await self._await_attempt(awaitable)
            except Exception as exc:  # noqa: BLE001
                error = exc

            should_retry, reason = self.decider.decide(error, state)
            if not should_retry:
                log_structured(
                    logger,
                    logging.DEBUG,
                    f"{name} failed after {state.attempts_used + 1} attempt(s), "
                    f"not retrying ({reason})",
                    operation=name,
                    attempts=state.attempts_used + 1,
                    reason=reason,
                )
                self.hooks.notify_exhausted(error, args, kwargs)
                raise error

            attempt = state.next_attempt()
            delay = self.policy.retry_delay(attempt)
            log_structured(
                logger,
                logging.DEBUG,
                f"{name} failed ({reason}), retry {attempt}/{self.policy.max_retries} "
                f"in {delay:.2f}s",
                operation=name,
                attempt=attempt,
                max_retries=self.policy.max_retries,
                delay=delay,
                reason=reason,
            )
            await asyncio.sleep(delay)
            await self.hooks.run_before_retry(attempt, args, kwargs)

            result = operation(*args, **kwargs)
            if not inspect.isawaitable(result):
                return result
            awaitable = result

    async def _await_attempt(self, awaitable: Awaitable[Any]) -> Any:
        if self.policy.attempt_timeout is None:
            return await awaitable
        return await asyncio.wait_for(awaitable, timeout=self.policy.attempt_timeout)
