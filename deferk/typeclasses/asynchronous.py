"""Async

MonadSuspend with callback-based asynchronous producers."""

from __future__ import annotations

import abc

from .._types import Kind, Proc, Thunk
from .suspend import MonadSuspend


class Async[F, E](MonadSuspend[F, E]):
    @abc.abstractmethod
    def async_[A](self, proc: Proc[A], /) -> Kind[F, A]:
        """
        Register proc(callback). The value completes on the first callback;
        further calls are ignored. No callback means it never completes.
        """

    def invoke[A](self, thunk: Thunk[A], /) -> Kind[F, A]:
        return self.delay(thunk)

    def never(self) -> Kind[F, object]:
        return self.async_(lambda _: None)


__all__ = ("Async",)
