"""
Promise - single-shot completion slot
=====================================

Backs memoization of DeferredK and callback registration of ``async_``.
Completion is a compare-and-set under a lock, so producers may complete
it from any thread; waiters are resumed on their own event loop.
"""

from __future__ import annotations

import asyncio
import logging
import threading

from ._types import Outcome

logger = logging.getLogger(__name__)


def _resolve[T](fut: asyncio.Future[Outcome[T]], outcome: Outcome[T]) -> None:
    if not fut.done():
        fut.set_result(outcome)


class Promise[T]:
    """
    Write-once holder of an Outcome.

    - ``try_start()`` claims the right to produce the outcome (once)
    - ``complete()`` stores the outcome (first write wins)
    - ``await get()`` waits for the outcome from any event loop
    """

    __slots__ = ("_lock", "_started", "_outcome", "_waiters")

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._started = False
        self._outcome: Outcome[T] | None = None
        self._waiters: list[asyncio.Future[Outcome[T]]] = []

    @classmethod
    def completed(cls, outcome: Outcome[T]) -> Promise[T]:
        """Promise that already holds an outcome."""
        promise: Promise[T] = cls()
        promise._started = True
        promise._outcome = outcome
        return promise

    @property
    def done(self) -> bool:
        return self._outcome is not None

    @property
    def outcome(self) -> Outcome[T] | None:
        """The stored outcome, or None while pending."""
        return self._outcome

    def try_start(self) -> bool:
        """Claim production of the outcome. True only for the first caller."""
        with self._lock:
            if self._started:
                return False
            self._started = True
            return True

    def complete(self, outcome: Outcome[T], /) -> bool:
        """
        Store the outcome if none is stored yet.

        Returns False (and changes nothing) when already completed.
        """
        with self._lock:
            if self._outcome is not None:
                logger.debug("Ignoring repeated completion with %r", outcome)
                return False
            self._started = True
            self._outcome = outcome
            waiters, self._waiters = self._waiters, []

        for fut in waiters:
            loop = fut.get_loop()
            if loop.is_closed():
                continue
            loop.call_soon_threadsafe(_resolve, fut, outcome)
        return True

    async def get(self) -> Outcome[T]:
        """Wait for the outcome without blocking the event loop."""
        with self._lock:
            if self._outcome is not None:
                return self._outcome
            fut: asyncio.Future[Outcome[T]] = asyncio.get_running_loop().create_future()
            self._waiters.append(fut)

        try:
            return await fut
        finally:
            with self._lock:
                if fut in self._waiters:
                    self._waiters.remove(fut)

    def __repr__(self) -> str:
        state = "pending" if self._outcome is None else repr(self._outcome)
        return f"Promise({state})"


__all__ = ("Promise",)
