"""ApplicativeError / MonadError

Failure injection and recovery."""

from __future__ import annotations

import abc
import typing
from collections.abc import Callable

from kungfu import Error, Ok, Result

from .._types import Kind, Predicate, Thunk
from .applicative import Applicative
from .monad import Monad


class ApplicativeError[F, E](Applicative[F]):
    """
    Laws:
    - Recovery: handle_error_with(raise_error(e), f) ≡ f(e)
    - Pass-through: handle_error_with(pure(a), f) ≡ pure(a)
    """

    @abc.abstractmethod
    def raise_error(self, e: E, /) -> Kind[F, typing.Never]: ...

    @abc.abstractmethod
    def handle_error_with[A](
        self,
        fa: Kind[F, A],
        f: Callable[[E], Kind[F, A]],
        /,
    ) -> Kind[F, A]: ...

    def handle_error[A](self, fa: Kind[F, A], f: Callable[[E], A], /) -> Kind[F, A]:
        """Recover with a plain value."""
        return self.handle_error_with(fa, lambda e: self.pure(f(e)))

    def attempt[A](self, fa: Kind[F, A], /) -> Kind[F, Result[A, E]]:
        """Move the failure into the value."""
        return self.handle_error_with(
            self.map(fa, Ok),
            lambda e: self.pure(Error(e)),
        )

    def from_result[A](self, result: Result[A, E], /) -> Kind[F, A]:
        match result:
            case Ok(value):
                return self.pure(value)
            case Error(err):
                return self.raise_error(err)

    def catch_nonfatal[A](self, thunk: Thunk[A], /) -> Kind[F, A]:
        """Evaluate thunk now; an Exception it raises becomes the failure."""
        try:
            return self.pure(thunk())
        except Exception as exc:
            return self.raise_error(exc)


class MonadError[F, E](Monad[F], ApplicativeError[F, E]):
    """
    Monad + ApplicativeError.

    No new primitives. Monad's map/ap/pure take precedence over
    ApplicativeError's inherited Applicative defaults.

    Law:
    - Left absorption: flat_map(raise_error(e), f) ≡ raise_error(e)
    """

    def ensure[A](
        self,
        fa: Kind[F, A],
        predicate: Predicate[A],
        error: Callable[[A], E],
        /,
    ) -> Kind[F, A]:
        """Fail with error(value) when the value does not satisfy predicate."""
        return self.flat_map(
            fa,
            lambda a: self.pure(a) if predicate(a) else self.raise_error(error(a)),
        )

    def rethrow[A](self, fa: Kind[F, Result[A, E]], /) -> Kind[F, A]:
        """Inverse of attempt."""
        return self.flat_map(fa, self.from_result)


__all__ = ("ApplicativeError", "MonadError")
