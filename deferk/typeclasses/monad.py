"""Monad

Applicative with sequencing of dependent computations."""

from __future__ import annotations

import abc
from collections.abc import Callable

from .._helpers import identity
from .._types import Kind
from ..context import ExecutionContext
from ..either import Either
from .applicative import Applicative


class Monad[F](Applicative[F]):
    """
    Sequencing of dependent computations.

    Laws:
    - Left identity: flat_map(pure(a), f) ≡ f(a)
    - Right identity: flat_map(fa, pure) ≡ fa
    - Associativity: flat_map(flat_map(fa, f), g) ≡ flat_map(fa, a => flat_map(f(a), g))

    map and ap have defaults in terms of flat_map; instances with a
    cheaper native version override them.
    """

    @abc.abstractmethod
    def flat_map[A, B](self, fa: Kind[F, A], f: Callable[[A], Kind[F, B]], /) -> Kind[F, B]: ...

    @abc.abstractmethod
    def flat_map_in[A, B](
        self,
        context: ExecutionContext,
        fa: Kind[F, A],
        f: Callable[[A], Kind[F, B]],
        /,
    ) -> Kind[F, B]:
        """flat_map with f invoked on context instead of the caller's."""

    @abc.abstractmethod
    def tail_rec_m[A, B](self, a: A, f: Callable[[A], Kind[F, Either[A, B]]], /) -> Kind[F, B]:
        """Loop on f until it yields Right. Must not grow the stack."""

    def map[A, B](self, fa: Kind[F, A], f: Callable[[A], B], /) -> Kind[F, B]:
        return self.flat_map(fa, lambda a: self.pure(f(a)))

    def ap[A, B](self, fa: Kind[F, A], ff: Kind[F, Callable[[A], B]], /) -> Kind[F, B]:
        return self.flat_map(ff, lambda f: self.map(fa, f))

    def flatten[A](self, ffa: Kind[F, Kind[F, A]], /) -> Kind[F, A]:
        return self.flat_map(ffa, identity)

    def followed_by[A, B](self, fa: Kind[F, A], fb: Kind[F, B], /) -> Kind[F, B]:
        """Run fa, discard its value, continue with fb."""
        return self.flat_map(fa, lambda _: fb)

    def for_effect[A, B](self, fa: Kind[F, A], fb: Kind[F, B], /) -> Kind[F, A]:
        """Run fa then fb, keep fa's value."""
        return self.flat_map(fa, lambda a: self.as_(fb, a))

    def if_m[B](
        self,
        fa: Kind[F, bool],
        if_true: Callable[[], Kind[F, B]],
        if_false: Callable[[], Kind[F, B]],
        /,
    ) -> Kind[F, B]:
        return self.flat_map(fa, lambda cond: if_true() if cond else if_false())


__all__ = ("Monad",)
