"""Internal helpers for deferk.

Common functions used across multiple modules.
Not part of the public API."""

from __future__ import annotations

import asyncio
import typing
from collections.abc import Callable, Coroutine

from kungfu import Error, Ok

from ._types import Outcome


# Tasks spawned in the background; strong references keep them alive
_background: set[asyncio.Task[typing.Any]] = set()


def identity[T](x: T) -> T:
    """Identity function: returns its argument unchanged."""
    return x


def apply_catching[T](f: Callable[..., T], *args: typing.Any) -> Outcome[T]:
    """
    Call f, moving a raised Exception into the failure channel.

    BaseException that is not an Exception (cancellation, interrupts)
    propagates.
    """
    try:
        return Ok(f(*args))
    except Exception as exc:
        return Error(exc)


def spawn(coro: Coroutine[typing.Any, typing.Any, None]) -> asyncio.Task[None]:
    """Schedule coro on the running loop without awaiting it."""
    task = asyncio.get_running_loop().create_task(coro)
    _background.add(task)
    task.add_done_callback(_background.discard)
    return task


__all__ = (
    "identity",
    "apply_catching",
    "spawn",
)
