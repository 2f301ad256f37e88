"""DeferredK capability instances

One instance class per capability, each extending the one below, plus
accessors returning shared singletons:

    from deferk import instances

    M = instances.monad()
    M.flat_map(M.pure(1), lambda x: M.pure(x + 1))
"""

from __future__ import annotations

import functools
from collections.abc import Callable

from ._types import Outcome, Proc, Thunk
from .context import ExecutionContext
from .deferred import DeferredK
from .either import Either
from .typeclasses import (
    Applicative,
    ApplicativeError,
    Async,
    Effect,
    Functor,
    Monad,
    MonadError,
    MonadSuspend,
)


class DeferredKFunctor(Functor[DeferredK]):
    def map[A, B](self, fa: DeferredK[A], f: Callable[[A], B], /) -> DeferredK[B]:
        return fa.map(f)


class DeferredKApplicative(DeferredKFunctor, Applicative[DeferredK]):
    def pure[A](self, a: A, /) -> DeferredK[A]:
        return DeferredK.pure(a)

    def ap[A, B](self, fa: DeferredK[A], ff: DeferredK[Callable[[A], B]], /) -> DeferredK[B]:
        return fa.ap(ff)


class DeferredKMonad(DeferredKApplicative, Monad[DeferredK]):
    def ap[A, B](self, fa: DeferredK[A], ff: DeferredK[Callable[[A], B]], /) -> DeferredK[B]:
        return fa.ap(ff)

    def flat_map[A, B](self, fa: DeferredK[A], f: Callable[[A], DeferredK[B]], /) -> DeferredK[B]:
        return fa.flat_map(f)

    def flat_map_in[A, B](
        self,
        context: ExecutionContext,
        fa: DeferredK[A],
        f: Callable[[A], DeferredK[B]],
        /,
    ) -> DeferredK[B]:
        return fa.flat_map_in(context, f)

    def map[A, B](self, fa: DeferredK[A], f: Callable[[A], B], /) -> DeferredK[B]:
        return fa.map(f)

    def tail_rec_m[A, B](self, a: A, f: Callable[[A], DeferredK[Either[A, B]]], /) -> DeferredK[B]:
        return DeferredK.tail_rec_m(a, f)

    def pure[A](self, a: A, /) -> DeferredK[A]:
        return DeferredK.pure(a)


class DeferredKApplicativeError(DeferredKApplicative, ApplicativeError[DeferredK, Exception]):
    def raise_error(self, e: Exception, /) -> DeferredK:
        return DeferredK.raise_error(e)

    def handle_error_with[A](
        self,
        fa: DeferredK[A],
        f: Callable[[Exception], DeferredK[A]],
        /,
    ) -> DeferredK[A]:
        return fa.handle_error_with(f)


class DeferredKMonadError(
    DeferredKMonad,
    DeferredKApplicativeError,
    MonadError[DeferredK, Exception],
):
    # both parents provide map/ap/pure; the Monad layer's are canonical
    ap = DeferredKMonad.ap
    map = DeferredKMonad.map
    pure = DeferredKMonad.pure


class DeferredKMonadSuspend(DeferredKMonadError, MonadSuspend[DeferredK, Exception]):
    def catch(self, exc: Exception, /) -> Exception:
        return exc

    def defer[A](self, thunk: Callable[[], DeferredK[A]], /) -> DeferredK[A]:
        return DeferredK.defer(thunk, catch=self.catch)


class DeferredKAsync(DeferredKMonadSuspend, Async[DeferredK, Exception]):
    def async_[A](self, proc: Proc[A], /) -> DeferredK[A]:
        return DeferredK.async_(proc, catch=self.catch)

    def invoke[A](self, thunk: Thunk[A], /) -> DeferredK[A]:
        return DeferredK.invoke(thunk, catch=self.catch)


class DeferredKEffect(DeferredKAsync, Effect[DeferredK, Exception]):
    def run_async[A](
        self,
        fa: DeferredK[A],
        cb: Callable[[Outcome[A]], DeferredK[None]],
        /,
    ) -> DeferredK[None]:
        return fa.run_async(cb)


# Accessors (capability lookup)

@functools.cache
def functor() -> DeferredKFunctor:
    return DeferredKFunctor()

@functools.cache
def applicative() -> DeferredKApplicative:
    return DeferredKApplicative()

@functools.cache
def monad() -> DeferredKMonad:
    return DeferredKMonad()

@functools.cache
def applicative_error() -> DeferredKApplicativeError:
    return DeferredKApplicativeError()

@functools.cache
def monad_error() -> DeferredKMonadError:
    return DeferredKMonadError()

@functools.cache
def monad_suspend() -> DeferredKMonadSuspend:
    return DeferredKMonadSuspend()

@functools.cache
def async_() -> DeferredKAsync:
    return DeferredKAsync()

@functools.cache
def effect() -> DeferredKEffect:
    return DeferredKEffect()


__all__ = (
    "DeferredKFunctor",
    "DeferredKApplicative",
    "DeferredKMonad",
    "DeferredKApplicativeError",
    "DeferredKMonadError",
    "DeferredKMonadSuspend",
    "DeferredKAsync",
    "DeferredKEffect",
    "functor",
    "applicative",
    "monad",
    "applicative_error",
    "monad_error",
    "monad_suspend",
    "async_",
    "effect",
)
