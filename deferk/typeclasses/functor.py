"""Functor

Types whose success value can be transformed."""

from __future__ import annotations

import abc
from collections.abc import Callable

from .._types import Kind


class Functor[F](abc.ABC):
    """
    Laws:
    - Identity: map(fa, id) ≡ fa
    - Composition: map(map(fa, f), g) ≡ map(fa, g ∘ f)
    """

    @abc.abstractmethod
    def map[A, B](self, fa: Kind[F, A], f: Callable[[A], B], /) -> Kind[F, B]: ...

    def lift[A, B](self, f: Callable[[A], B], /) -> Callable[[Kind[F, A]], Kind[F, B]]:
        """Turn f into a function over F."""
        return lambda fa: self.map(fa, f)

    def as_[A, B](self, fa: Kind[F, A], b: B, /) -> Kind[F, B]:
        """Replace the value with b."""
        return self.map(fa, lambda _: b)

    def void[A](self, fa: Kind[F, A], /) -> Kind[F, None]:
        return self.as_(fa, None)

    def fproduct[A, B](self, fa: Kind[F, A], f: Callable[[A], B], /) -> Kind[F, tuple[A, B]]:
        """Pair the value with f applied to it."""
        return self.map(fa, lambda a: (a, f(a)))


__all__ = ("Functor",)
