"""Applicative

Functor with lifting of plain values and application of lifted functions."""

from __future__ import annotations

import abc
from collections.abc import Callable

from .._types import Kind
from .functor import Functor


class Applicative[F](Functor[F]):
    """
    Laws:
    - Identity: ap(fa, pure(id)) ≡ fa
    - Homomorphism: ap(pure(a), pure(f)) ≡ pure(f(a))
    """

    @abc.abstractmethod
    def pure[A](self, a: A, /) -> Kind[F, A]: ...

    @abc.abstractmethod
    def ap[A, B](self, fa: Kind[F, A], ff: Kind[F, Callable[[A], B]], /) -> Kind[F, B]: ...

    def map[A, B](self, fa: Kind[F, A], f: Callable[[A], B], /) -> Kind[F, B]:
        return self.ap(fa, self.pure(f))

    def unit(self) -> Kind[F, None]:
        return self.pure(None)

    def map2[A, B, Z](
        self,
        fa: Kind[F, A],
        fb: Kind[F, B],
        f: Callable[[A, B], Z],
        /,
    ) -> Kind[F, Z]:
        """Combine two values with f once both are available."""
        return self.ap(fb, self.map(fa, lambda a: lambda b: f(a, b)))

    def product[A, B](self, fa: Kind[F, A], fb: Kind[F, B], /) -> Kind[F, tuple[A, B]]:
        return self.map2(fa, fb, lambda a, b: (a, b))


__all__ = ("Applicative",)
