"""
Running DeferredK down to a value.

Functions observing a deferred value and returning a Result or a plain value.
"""

from __future__ import annotations

from kungfu import Error, Ok

from .._types import Outcome
from ..deferred import DeferredK


async def to_result[T](deferred: DeferredK[T]) -> Outcome[T]:
    """
    Observe and return Result.

    Example:
        from deferk import lift as L

        result = await L.down.to_result(L.up.pure(User(id=42)))
        # result: Ok(User(id=42))
    """
    return await deferred()


async def unsafe[T](deferred: DeferredK[T]) -> T:
    """
    Observe and unwrap, raising the failure.

    Example:
        user = await L.down.unsafe(fetch_user(42))
        # Returns User(id=42) or raises
    """
    return await deferred.unwrap()


async def or_else[T](deferred: DeferredK[T], default: T) -> T:
    """
    Observe and return value or default.

    Example:
        user = await L.down.or_else(
            fetch_user(42),
            default=User(id=0, name="Guest")
        )
    """
    match await deferred():
        case Ok(v):
            return v
        case Error(_):
            return default


__all__ = (
    "to_result",
    "unsafe",
    "or_else",
)
