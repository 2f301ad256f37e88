"""Delay

Pausing before observing."""

from __future__ import annotations

import asyncio

from kungfu import Ok

from .._types import Outcome
from ..deferred import DeferredK


def sleep(seconds: float) -> DeferredK[None]:
    """Complete with None after seconds."""
    if seconds < 0.0:
        raise ValueError("seconds must be >= 0")

    async def run() -> Outcome[None]:
        await asyncio.sleep(seconds)
        return Ok(None)

    return DeferredK(run)


def delay[T](
    deferred: DeferredK[T],
    *,
    seconds: float,
) -> DeferredK[T]:
    """Sleep before observing."""
    return sleep(seconds).flat_map(lambda _: deferred)


__all__ = ("delay", "sleep")
