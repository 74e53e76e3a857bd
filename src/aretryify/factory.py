r"""Decorator factory producing retrying surfaces.

``retryify`` accepts either a single callable or an object (or mapping)
exposing several operations, and returns a surface of the same shape
where the selected operations are retried according to a
``RetryPolicy``.
"""

from __future__ import annotations

__all__ = ["RetryingProxy", "retryify"]

import logging
from collections.abc import Mapping
from typing import Any

from aretryify.policy import RetryPolicy, resolve_policy
from aretryify.retry.executor import RetryExecutor

logger: logging.Logger = logging.getLogger(__name__)


class RetryingProxy:
    """Shallow copy of an object with retrying operations.

    The proxy exposes the public members of the wrapped object as plain
    attributes. Selected operations are decorated and stay bound to the
    wrapped object; every other member is the very value read from it.

    Args:
        target: The wrapped object.
        members: The members exposed by the proxy.

    Example:
        ```pycon
        >>> from aretryify.factory import RetryingProxy
        >>> proxy = RetryingProxy(object(), {"answer": 42})
        >>> proxy.answer
        42

        ```
    """

    def __init__(self, target: Any, members: dict[str, Any]) -> None:
        self.__dict__.update(members)
        self.__wrapped__ = target

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}({self.__wrapped__!r})"


def _public_members(target: Any) -> dict[str, Any]:
    r"""Return the public members of an object, inherited ones included.

    Dunder names are protocol hooks and are left out. Attributes that
    cannot be read are skipped, like ``inspect.getmembers`` does.
    """
    members = {}
    for name in dir(target):
        if name.startswith("__") and name.endswith("__"):
            continue
        try:
            members[name] = getattr(target, name)
        except AttributeError:
            continue
    return members


def _decorate_members(
    members: Mapping[str, Any], executor: RetryExecutor, policy: RetryPolicy
) -> dict[str, Any]:
    decorated = {}
    for name, value in members.items():
        if callable(value) and policy.member_selector(name):
            decorated[name] = executor.wrap(value)
        else:
            decorated[name] = value
    logger.debug(
        f"Decorated {sum(value is not members[name] for name, value in decorated.items())} "
        f"of {len(members)} member(s)"
    )
    return decorated


def retryify(
    target: Any = None,
    /,
    policy: RetryPolicy | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> Any:
    r"""Decorate a callable or the operations of an object with retries.

    Args:
        target: The callable, object or mapping to decorate. When omitted,
            a decorator applying the same policy is returned.
        policy: A ``RetryPolicy`` or a mapping of policy overrides.
        **overrides: Policy fields applied on top of ``policy``: any of
            ``max_retries``, ``retry_delay``, ``should_retry``,
            ``before_retry``, ``member_selector``, ``on_exhausted`` and
            ``attempt_timeout``.

    Returns:
        - for a callable: the decorated callable;
        - for a mapping: a ``dict`` with the same keys where selected
          callables are decorated;
        - for any other object: a ``RetryingProxy`` mirroring its public
          members, inherited ones included, where selected callables are
          decorated and bound to ``target``.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aretryify import retryify
        >>> attempts = []
        >>> async def fetch(key):
        ...     attempts.append(key)
        ...     if len(attempts) == 1:
        ...         raise ConnectionError("reset")
        ...     return key.upper()
        ...
        >>> fetch_with_retry = retryify(fetch, max_retries=2, retry_delay=lambda attempt: 0)
        >>> asyncio.run(fetch_with_retry("abc"))
        'ABC'
        >>> attempts
        ['abc', 'abc']
        >>> @retryify(max_retries=0)
        ... async def ping():
        ...     return "pong"
        ...
        >>> asyncio.run(ping())
        'pong'

        ```
    """
    resolved = resolve_policy(policy, **overrides)
    if target is None:
        return lambda function: retryify(function, resolved)

    executor = RetryExecutor(resolved)
    if callable(target):
        return executor.wrap(target)
    if isinstance(target, Mapping):
        return _decorate_members(target, executor, resolved)
    return RetryingProxy(target, _decorate_members(_public_members(target), executor, resolved))
