"""Timeout

Deferred values have no intrinsic timeout (an async_ producer that never
calls back stays pending). Callers bound the wait here."""

from __future__ import annotations

import asyncio

from kungfu import Error

from .._errors import TimeoutError
from .._types import Outcome
from ..deferred import DeferredK


def timeout[T](
    deferred: DeferredK[T],
    *,
    seconds: float,
) -> DeferredK[T]:
    """
    Fail with TimeoutError if observing takes longer than seconds.

    The underlying value is not cancelled; it stays observable and may
    still complete later.
    """
    if seconds < 0.0:
        raise ValueError("seconds must be >= 0")

    async def run() -> Outcome[T]:
        try:
            return await asyncio.wait_for(asyncio.shield(deferred()), timeout=seconds)
        except asyncio.TimeoutError:
            return Error(TimeoutError(seconds))

    return DeferredK(run)


__all__ = ("timeout",)
