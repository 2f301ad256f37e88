"""DeferredK

Deferred computation unifying:
- Lazy (nothing runs until the value is observed)
- Coro (asynchronous, driven by asyncio)
- Result[T, Exception] (success/failure)
- Memoized (the backing computation runs at most once)

Built on top of kungfu library patterns."""

from __future__ import annotations

import asyncio
import logging
import typing
from collections.abc import Callable, Coroutine
from typing import assert_never

from kungfu import Error, Ok, Result

from ._helpers import apply_catching, identity, spawn
from ._types import Outcome, Predicate, Proc, Runner, Thunk
from .context import ExecutionContext
from .either import Either, Left, Right
from .promise import Promise

logger = logging.getLogger(__name__)


class DeferredK[T]:
    """Deferred value.

    Wraps a fn returning a coroutine of ``Result[T, Exception]``. The first
    observer drives the coroutine; every observer, concurrent or later,
    receives the same Result.

    Monadic laws:
    - Left identity: pure(a).flat_map(f) ≡ f(a)
    - Right identity: m.flat_map(pure) ≡ m
    - Associativity: m.flat_map(f).flat_map(g) ≡ m.flat_map(x => f(x).flat_map(g))
    """

    __slots__ = ("_value", "_promise")

    def __init__(self, value: Runner[T], /) -> None:
        """Create DeferredK from a fn returning coroutine."""
        self._value = value
        self._promise: Promise[T] = Promise()

    @staticmethod
    def _of[V](outcome: Outcome[V]) -> DeferredK[V]:
        async def run() -> Outcome[V]:
            return outcome

        deferred = DeferredK(run)
        deferred._promise = Promise.completed(outcome)
        return deferred

    # Constructors

    @staticmethod
    def pure[V](value: V) -> DeferredK[V]:
        """Lift a value into an already completed DeferredK."""
        return DeferredK._of(Ok(value))

    @staticmethod
    def raise_error(error: Exception) -> DeferredK[typing.Never]:
        """Already failed DeferredK. Runs no user code."""
        return DeferredK._of(Error(error))

    @staticmethod
    def from_result[V](result: Result[V, Exception]) -> DeferredK[V]:
        """Lift a computed Result."""
        return DeferredK._of(result)

    @staticmethod
    def defer[V](
        thunk: Callable[[], DeferredK[V]],
        *,
        catch: Callable[[Exception], Exception] = identity,
    ) -> DeferredK[V]:
        """Delay construction of a DeferredK until the result is observed."""

        async def run() -> Outcome[V]:
            try:
                inner = thunk()
            except Exception as exc:
                return Error(catch(exc))
            return await inner()

        return DeferredK(run)

    @staticmethod
    def async_[V](
        proc: Proc[V],
        *,
        catch: Callable[[Exception], Exception] = identity,
    ) -> DeferredK[V]:
        """
        Register a callback-style producer.

        proc is called once, when the result is first observed. The first
        callback invocation completes the value; later ones are ignored.
        """

        async def run() -> Outcome[V]:
            slot: Promise[V] = Promise()

            def callback(outcome: Outcome[V]) -> None:
                slot.complete(outcome)

            try:
                proc(callback)
            except Exception as exc:
                slot.complete(Error(catch(exc)))
            return await slot.get()

        return DeferredK(run)

    @staticmethod
    def invoke[V](
        thunk: Thunk[V],
        *,
        context: ExecutionContext | None = None,
        catch: Callable[[Exception], Exception] = identity,
    ) -> DeferredK[V]:
        """
        Evaluate a synchronous thunk lazily.

        With a context, the thunk runs there instead of on the observing task.
        """

        async def run() -> Outcome[V]:
            if context is None:
                outcome = apply_catching(thunk)
            else:
                outcome = await context.run(thunk)
            match outcome:
                case Ok(_):
                    return outcome
                case Error(err):
                    return Error(catch(err))
                case _ as unreachable:
                    assert_never(unreachable)

        return DeferredK(run)

    @staticmethod
    def tail_rec_m[A, B](a: A, f: Callable[[A], DeferredK[Either[A, B]]]) -> DeferredK[B]:
        """
        Apply f until it produces Right(b).

        Runs as a loop, so the depth of the recursion does not grow the stack.
        """

        async def run() -> Outcome[B]:
            current = a
            while True:
                try:
                    step = f(current)
                except Exception as exc:
                    return Error(exc)
                match await step():
                    case Ok(Left(value)):
                        current = value
                    case Ok(Right(value)):
                        return Ok(value)
                    case Ok(other):
                        return Error(TypeError(f"tail_rec_m step must produce Left or Right, got {other!r}"))
                    case Error(err):
                        return Error(err)

        return DeferredK(run)

    @staticmethod
    def never() -> DeferredK[typing.Never]:
        """DeferredK that never completes."""

        async def run() -> Outcome[typing.Never]:
            return await Promise().get()

        return DeferredK(run)

    # Functor / Applicative operations

    def map[U](self, f: Callable[[T], U], /) -> DeferredK[U]:
        """Functor fmap - apply function to success value."""

        async def run() -> Outcome[U]:
            match await self():
                case Ok(value):
                    return apply_catching(f, value)
                case Error(err):
                    return Error(err)

        return DeferredK(run)

    def ap[U](self, ff: DeferredK[Callable[[T], U]], /) -> DeferredK[U]:
        """
        Apply a deferred function to this value.

        Both sides are driven concurrently. If both fail, this side's
        failure is reported.
        """

        async def run() -> Outcome[U]:
            fa, fn = await asyncio.gather(self(), ff())
            match fa, fn:
                case Error(err), _:
                    return Error(err)
                case _, Error(err):
                    return Error(err)
                case Ok(value), Ok(f):
                    return apply_catching(f, value)
                case _ as unreachable:
                    assert_never(unreachable)

        return DeferredK(run)

    # Monad operations

    def flat_map[U](self, f: Callable[[T], DeferredK[U]], /) -> DeferredK[U]:
        """
        Monadic bind (>>=).

        - On Ok: observes f(value)
        - On Error: short-circuit, f is never called
        """

        async def run() -> Outcome[U]:
            match await self():
                case Ok(value):
                    try:
                        next_ = f(value)
                    except Exception as exc:
                        return Error(exc)
                    return await next_()
                case Error(err):
                    return Error(err)

        return DeferredK(run)

    def flat_map_in[U](
        self,
        context: ExecutionContext,
        f: Callable[[T], DeferredK[U]],
        /,
    ) -> DeferredK[U]:
        """Monadic bind with f called on the given execution context."""

        async def run() -> Outcome[U]:
            match await self():
                case Ok(value):
                    match await context.run(lambda: f(value)):
                        case Ok(next_):
                            return await next_()
                        case Error(err):
                            return Error(err)
                case Error(err):
                    return Error(err)

        return DeferredK(run)

    # Error operations

    def handle_error_with(self, f: Callable[[Exception], DeferredK[T]], /) -> DeferredK[T]:
        """On failure, continue with f(error). Success passes through."""

        async def run() -> Outcome[T]:
            outcome = await self()
            match outcome:
                case Ok(_):
                    return outcome
                case Error(err):
                    try:
                        recovered = f(err)
                    except Exception as exc:
                        return Error(exc)
                    return await recovered()

        return DeferredK(run)

    def handle_error(self, f: Callable[[Exception], T], /) -> DeferredK[T]:
        """On failure, succeed with f(error)."""

        async def run() -> Outcome[T]:
            outcome = await self()
            match outcome:
                case Ok(_):
                    return outcome
                case Error(err):
                    return apply_catching(f, err)

        return DeferredK(run)

    def attempt(self) -> DeferredK[Outcome[T]]:
        """Move the failure into the value. Never fails."""

        async def run() -> Outcome[Outcome[T]]:
            return Ok(await self())

        return DeferredK(run)

    def ensure(
        self,
        predicate: Predicate[T],
        error: Callable[[T], Exception],
        /,
    ) -> DeferredK[T]:
        """Turn a success into a failure with error(value) if the value fails the check."""

        async def run() -> Outcome[T]:
            outcome = await self()
            match outcome:
                case Ok(value):
                    match apply_catching(predicate, value):
                        case Ok(passed) if passed:
                            return outcome
                        case Ok(_):
                            match apply_catching(error, value):
                                case Ok(err) | Error(err):
                                    return Error(err)
                        case Error(err):
                            return Error(err)
                case Error(_):
                    return outcome

        return DeferredK(run)

    # Effect operations

    def run_async(self, cb: Callable[[Outcome[T]], DeferredK[None]], /) -> DeferredK[None]:
        """
        Run in the background, then observe cb(outcome).

        The returned DeferredK completes once the run is scheduled,
        not when cb is done.
        """

        async def run() -> Outcome[None]:
            spawn(self._run_callback(cb))
            return Ok(None)

        return DeferredK(run)

    async def _run_callback(self, cb: Callable[[Outcome[T]], DeferredK[None]]) -> None:
        outcome = await self()
        match apply_catching(cb, outcome):
            case Ok(done):
                match await done():
                    case Error(err):
                        logger.warning("run_async callback failed: %r", err)
                    case _:
                        pass
            case Error(err):
                logger.warning("run_async callback raised: %r", err)

    def unsafe_run_async(self, cb: Callable[[Outcome[T]], None], /) -> None:
        """Run on the current event loop now, passing the outcome to cb."""

        async def run() -> None:
            outcome = await self()
            match apply_catching(cb, outcome):
                case Error(err):
                    logger.warning("unsafe_run_async callback raised: %r", err)
                case _:
                    pass

        spawn(run())

    def unsafe_run_sync(self) -> T:
        """Drive to completion on a fresh event loop. Raises the failure."""
        return asyncio.run(self.unwrap())

    def unwrap(self) -> Coroutine[typing.Any, typing.Any, T]:
        """Unwrap the value, raising the failure."""

        async def inner() -> T:
            match await self():
                case Ok(value):
                    return value
                case Error(err):
                    raise err

        return inner()

    @property
    def is_completed(self) -> bool:
        return self._promise.done

    # Protocol methods

    async def _drive(self) -> Outcome[T]:
        promise = self._promise
        if promise.try_start():
            try:
                outcome = await self._value()
            except Exception as exc:
                outcome = Error(exc)
            except BaseException as exc:
                # cancellation or interrupt: other observers see it as the failure
                promise.complete(Error(exc))
                raise
            promise.complete(outcome)
        return await promise.get()

    def __call__(self) -> Coroutine[typing.Any, typing.Any, Outcome[T]]:
        """Observe the deferred value, returning coroutine."""
        return self._drive()

    def __await__(self) -> typing.Generator[typing.Any, None, Outcome[T]]:
        """Allow direct await on the deferred value."""
        return self._drive().__await__()

    def __repr__(self) -> str:
        return f"DeferredK({self._promise!r})"


__all__ = ("DeferredK",)
