"""MonadSuspend

MonadError with lazy construction of effects."""

from __future__ import annotations

import abc
from collections.abc import Callable

from .._types import Kind, Thunk
from .error import MonadError


class MonadSuspend[F, E](MonadError[F, E]):
    @abc.abstractmethod
    def defer[A](self, thunk: Callable[[], Kind[F, A]], /) -> Kind[F, A]:
        """Build the effect only when it is observed."""

    def catch(self, exc: Exception, /) -> E:
        """Normalise an exception raised by user code. Identity by default."""
        return exc  # type: ignore[return-value]

    def delay[A](self, thunk: Thunk[A], /) -> Kind[F, A]:
        """Evaluate thunk lazily; what it raises goes through catch."""

        def build() -> Kind[F, A]:
            try:
                return self.pure(thunk())
            except Exception as exc:
                return self.raise_error(self.catch(exc))

        return self.defer(build)

    def lazy(self) -> Kind[F, None]:
        return self.delay(lambda: None)

    def defer_unit(self, thunk: Thunk[object], /) -> Kind[F, None]:
        return self.void(self.delay(thunk))


__all__ = ("MonadSuspend",)
