"""
Execution contexts
==================

Scheduling targets onto which deferred work is submitted.

A context only has to accept a unit of work and eventually run it
(``execute``). ``run`` builds on that to hand a thunk's outcome back to
the awaiting task, wherever the thunk actually ran.
"""

from __future__ import annotations

import abc
import asyncio
import logging
import threading
from concurrent.futures import ThreadPoolExecutor

from kungfu import Error, Ok

from ._errors import ContextClosedError
from ._types import Outcome, Thunk, Work
from .config import RuntimeConfig
from .promise import Promise

logger = logging.getLogger(__name__)


class ExecutionContext(abc.ABC):
    """Abstract scheduling target."""

    name: str = "context"

    @abc.abstractmethod
    def execute(self, work: Work, /) -> None:
        """
        Submit work. Must not block waiting for the work to finish.

        Raises ContextClosedError when the context no longer accepts work.
        """

    async def run[T](self, fn: Thunk[T], /) -> Outcome[T]:
        """Run fn on this context and wait for its outcome."""
        promise: Promise[T] = Promise()

        def work() -> None:
            try:
                outcome: Outcome[T] = Ok(fn())
            except Exception as exc:
                outcome = Error(exc)
            promise.complete(outcome)

        try:
            self.execute(work)
        except ContextClosedError as exc:
            return Error(exc)
        return await promise.get()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class ImmediateContext(ExecutionContext):
    """Runs work inline, on the submitting thread."""

    name = "immediate"

    def execute(self, work: Work, /) -> None:
        work()


class LoopContext(ExecutionContext):
    """Submits work to an asyncio event loop, from any thread."""

    def __init__(self, loop: asyncio.AbstractEventLoop, *, name: str = "loop") -> None:
        self._loop = loop
        self.name = name

    @classmethod
    def current(cls) -> LoopContext:
        """Context for the running event loop."""
        return cls(asyncio.get_running_loop())

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    def execute(self, work: Work, /) -> None:
        if self._loop.is_closed():
            raise ContextClosedError(self.name)
        self._loop.call_soon_threadsafe(work)


class ThreadPoolContext(ExecutionContext):
    """
    Thread pool backed context for blocking or CPU-bound work.

    Usage:
        with ThreadPoolContext(RuntimeConfig(max_workers=2)) as ctx:
            await fa.flat_map_in(ctx, load_blocking)
    """

    def __init__(self, config: RuntimeConfig | None = None) -> None:
        self.config = config or RuntimeConfig()
        self.name = self.config.thread_name_prefix
        self._executor = ThreadPoolExecutor(
            max_workers=self.config.max_workers,
            thread_name_prefix=self.config.thread_name_prefix,
        )
        self._closed = False
        logger.debug(
            "Started thread pool %r with %d workers",
            self.name,
            self.config.max_workers,
        )

    @property
    def closed(self) -> bool:
        return self._closed

    def execute(self, work: Work, /) -> None:
        if self._closed:
            raise ContextClosedError(self.name)
        try:
            self._executor.submit(self._guarded, work)
        except RuntimeError:
            raise ContextClosedError(self.name) from None

    def _guarded(self, work: Work) -> None:
        try:
            work()
        except Exception:
            logger.warning("Unhandled exception in work on %r", self.name, exc_info=True)

    def shutdown(self, *, wait: bool = True) -> None:
        if self._closed:
            return
        self._closed = True
        self._executor.shutdown(wait=wait)
        logger.debug("Shut down thread pool %r", self.name)

    def __enter__(self) -> ThreadPoolContext:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()


_default_lock = threading.Lock()
_default: ThreadPoolContext | None = None


def default_context() -> ThreadPoolContext:
    """Shared thread pool, created on first use from RuntimeConfig.from_env()."""
    global _default
    with _default_lock:
        if _default is None or _default.closed:
            _default = ThreadPoolContext(RuntimeConfig.from_env())
        return _default


def shutdown_default_context(*, wait: bool = True) -> None:
    global _default
    with _default_lock:
        ctx, _default = _default, None
    if ctx is not None:
        ctx.shutdown(wait=wait)


__all__ = (
    "ExecutionContext",
    "ImmediateContext",
    "LoopContext",
    "ThreadPoolContext",
    "default_context",
    "shutdown_default_context",
)
