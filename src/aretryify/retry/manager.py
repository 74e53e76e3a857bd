r"""Hook manager for the retry lifecycle.

This module provides the ``HookManager`` class that runs the user
``before_retry`` hook between attempts and dispatches the
fire-and-forget ``on_exhausted`` notification.
"""

from __future__ import annotations

__all__ = ["HookManager"]

import asyncio
import inspect
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger: logging.Logger = logging.getLogger(__name__)


class HookManager:
    """Runs the user hooks of a retry policy.

    Args:
        before_retry: Hook run before every retry. It may return an
            awaitable.
        on_exhausted: Optional notification run when a call gives up.

    Attributes:
        pending: Background tasks created for asynchronous
            ``on_exhausted`` results that have not finished yet.
    """

    def __init__(
        self,
        before_retry: Callable[[int, tuple[Any, ...], dict[str, Any]], Awaitable[Any] | None],
        on_exhausted: Callable[..., Any] | None = None,
    ) -> None:
        self.before_retry = before_retry
        self.on_exhausted = on_exhausted
        self.pending: set[asyncio.Future[Any]] = set()

    async def run_before_retry(
        self, attempt: int, args: tuple[Any, ...], kwargs: dict[str, Any]
    ) -> None:
        """Run ``before_retry`` to completion.

        Any exception raised by the hook, synchronously or by its
        awaitable, propagates unchanged.

        Args:
            attempt: The number of the retry about to start (1-indexed).
            args: Positional arguments of the original call.
            kwargs: Keyword arguments of the original call.
        """
        result = self.before_retry(attempt, args, kwargs)
        if inspect.isawaitable(result):
            await result

    def notify_exhausted(
        self, error: Exception, args: tuple[Any, ...], kwargs: dict[str, Any]
    ) -> None:
        """Invoke ``on_exhausted`` without waiting for it.

        If the notification returns an awaitable, it is scheduled on the
        running event loop. Failures of the notification are logged and
        never propagated.

        Args:
            error: The exception the call is about to raise.
            args: Positional arguments of the original call.
            kwargs: Keyword arguments of the original call.
        """
        if self.on_exhausted is None:
            return
        try:
            result = self.on_exhausted(error, *args, **kwargs)
        except Exception:
            logger.exception("on_exhausted notification failed")
            return
        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self.pending.add(task)
            task.add_done_callback(self._on_notification_done)

    def _on_notification_done(self, task: asyncio.Future[Any]) -> None:
        self.pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("on_exhausted notification failed", exc_info=exc)
