"""Effect

Async values that can be run, reporting the outcome to a callback."""

from __future__ import annotations

import abc
from collections.abc import Callable

from kungfu import Result

from .._types import Kind
from .asynchronous import Async


class Effect[F, E](Async[F, E]):
    @abc.abstractmethod
    def run_async[A](
        self,
        fa: Kind[F, A],
        cb: Callable[[Result[A, E]], Kind[F, None]],
        /,
    ) -> Kind[F, None]:
        """
        Start fa and hand its outcome to cb.

        The returned effect completes once the run is scheduled, not when
        cb's effect is done.
        """


__all__ = ("Effect",)
