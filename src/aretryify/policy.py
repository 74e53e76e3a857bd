r"""Retry policy dataclass and override resolution.

A ``RetryPolicy`` is the immutable configuration shared by every
operation decorated by one ``retryify`` call. It is resolved once, at
decoration time, by merging user overrides onto the defaults.
"""

from __future__ import annotations

__all__ = ["RetryPolicy", "resolve_policy"]

import logging
from dataclasses import dataclass, field, fields, replace
from typing import TYPE_CHECKING, Any

from aretryify.backoff.constant import ConstantBackoff
from aretryify.config import DEFAULT_MAX_RETRIES, DEFAULT_RETRY_DELAY

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Mapping

logger: logging.Logger = logging.getLogger(__name__)


def always_retry(error: Exception) -> bool:  # noqa: ARG001
    r"""Default ``should_retry`` predicate: retry on every failure."""
    return True


def no_op_before_retry(attempt: int, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:  # noqa: ARG001
    r"""Default ``before_retry`` hook: do nothing."""


def select_all_members(name: str) -> bool:  # noqa: ARG001
    r"""Default ``member_selector``: decorate every callable member."""
    return True


@dataclass(frozen=True)
class RetryPolicy:
    """Configuration of the retry behavior of decorated operations.

    The policy is read-only once built, so it can be shared by any number
    of concurrent calls.

    Args:
        max_retries: Maximum number of retries after the first attempt.
            Use ``0`` to disable retrying and ``math.inf`` for no ceiling.
        retry_delay: Function mapping the retry number (1-indexed) to the
            delay in seconds before that retry. Any backoff strategy from
            ``aretryify.backoff`` can be used.
        should_retry: Synchronous predicate receiving the exception raised
            by a failed attempt. Returning ``False`` stops retrying.
        before_retry: Hook called after the delay and before the next
            attempt with ``(attempt, args, kwargs)``. It may return an
            awaitable, which is awaited before the next attempt.
        member_selector: Predicate on member names that selects which
            callables of an object get decorated.
        on_exhausted: Optional notification called with
            ``(error, *args, **kwargs)`` when a call gives up. Its result
            is not awaited and its failures are only logged.
        attempt_timeout: Optional timeout in seconds for each awaited
            attempt. A timed out attempt raises ``asyncio.TimeoutError``
            which is handled like any other failure.

    Example:
        ```pycon
        >>> from aretryify import RetryPolicy
        >>> policy = RetryPolicy()
        >>> policy.max_retries
        5
        >>> policy.retry_delay(1)
        0.5
        >>> merged = policy.merge(max_retries=2)
        >>> merged.max_retries
        2
        >>> policy.max_retries  # Original unchanged
        5

        ```
    """

    max_retries: float = DEFAULT_MAX_RETRIES
    retry_delay: Callable[[int], float] = field(
        default_factory=lambda: ConstantBackoff(DEFAULT_RETRY_DELAY)
    )
    should_retry: Callable[[Exception], bool] = always_retry
    before_retry: Callable[[int, tuple[Any, ...], dict[str, Any]], Awaitable[Any] | None] = (
        no_op_before_retry
    )
    member_selector: Callable[[str], bool] = select_all_members
    on_exhausted: Callable[..., Any] | None = None
    attempt_timeout: float | None = None

    def merge(self, **overrides: Any) -> RetryPolicy:
        """Create a new policy with the given fields overridden.

        ``None`` values and unknown keys are ignored, so a partially
        filled mapping of options can be merged without validation.
        Unknown keys are reported with a warning.

        Args:
            **overrides: Field values to override.

        Returns:
            A new ``RetryPolicy`` instance.

        Example:
            ```pycon
            >>> from aretryify import RetryPolicy
            >>> RetryPolicy().merge(max_retries=1, should_retry=None).max_retries
            1

            ```
        """
        names = {f.name for f in fields(self)}
        unknown = sorted(key for key in overrides if key not in names)
        if unknown:
            logger.warning(f"Ignoring unknown retry policy option(s): {', '.join(unknown)}")
        filtered_overrides = {
            key: value for key, value in overrides.items() if key in names and value is not None
        }
        return replace(self, **filtered_overrides)

    def to_dict(self) -> dict[str, Any]:
        """Convert the policy to a dictionary of its fields.

        Example:
            ```pycon
            >>> from aretryify import RetryPolicy
            >>> RetryPolicy(max_retries=1).to_dict()["max_retries"]
            1

            ```
        """
        return {f.name: getattr(self, f.name) for f in fields(self)}


def resolve_policy(
    policy: RetryPolicy | Mapping[str, Any] | None = None, **overrides: Any
) -> RetryPolicy:
    r"""Resolve the policy used by one decoration.

    Args:
        policy: A ready ``RetryPolicy``, a mapping of overrides applied to
            the defaults, or ``None`` for the defaults.
        **overrides: Field values applied on top of ``policy``.

    Returns:
        The resolved policy.

    Example:
        ```pycon
        >>> from aretryify.policy import resolve_policy
        >>> resolve_policy({"max_retries": 3}, max_retries=1).max_retries
        1
        >>> resolve_policy().max_retries
        5

        ```
    """
    if isinstance(policy, RetryPolicy):
        resolved = policy
    else:
        resolved = RetryPolicy().merge(**dict(policy or {}))
    if overrides:
        resolved = resolved.merge(**overrides)
    return resolved
