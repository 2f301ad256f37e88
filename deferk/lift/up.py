"""
Lifting values into DeferredK.

Functions turning plain values, Result, Optional and exception-based
code into deferred values.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Never

from kungfu import Error, Ok, Result

from .._types import Outcome
from ..deferred import DeferredK


def pure[T](value: T) -> DeferredK[T]:
    """
    Lift pure value into an already completed DeferredK.

    Example:
        from deferk import lift as L

        user = L.up.pure(User(id=42))
        result = await L.down.to_result(user)  # Ok(User(id=42))
    """
    return DeferredK.pure(value)


def fail(error: Exception) -> DeferredK[Never]:
    """
    Create always-failing DeferredK. Dual of pure().

    Example:
        error = L.up.fail(ValidationError("bad input"))
        result = await L.down.to_result(error)  # Error(ValidationError(...))
    """
    return DeferredK.raise_error(error)


def from_result[T](value: Result[T, Exception]) -> DeferredK[T]:
    """
    Lift already-computed Result.

    NOTE: This is NOT lazy — result is already computed.
          For lazy evaluation, use catching with a thunk.
    """
    return DeferredK.from_result(value)


def optional[T](
    value: T | None,
    *,
    error: Callable[[], Exception],
) -> DeferredK[T]:
    """
    Convert Optional to DeferredK. None becomes Error(error()).

    Example:
        def get_user(user_id: int) -> DeferredK[User]:
            user = db.find(user_id)  # returns User | None
            return L.up.optional(user, error=lambda: NotFoundError(user_id))

    NOTE: error is a thunk (zero-arg callable) to avoid computing
          error message when value is present.
    """
    if value is None:
        return DeferredK.defer(lambda: DeferredK.raise_error(error()))
    return DeferredK.pure(value)


def catching[T](
    thunk: Callable[[], T],
    *,
    on_error: Callable[[Exception], Exception],
) -> DeferredK[T]:
    """
    Run sync thunk when observed, converting exceptions with on_error.

    Example:
        import json

        def parse_json(raw: str) -> DeferredK[dict]:
            return L.up.catching(
                lambda: json.loads(raw),
                on_error=lambda e: ParseError(str(e)),
            )
    """
    return DeferredK.invoke(thunk, catch=on_error)


def catching_async[T](
    thunk: Callable[[], Awaitable[T]],
    *,
    on_error: Callable[[Exception], Exception],
) -> DeferredK[T]:
    """
    Async version of catching() for code that raises instead of
    returning Result (legacy code, third-party libraries).

    Example:
        import httpx

        def fetch_external(url: str) -> DeferredK[Response]:
            return L.up.catching_async(
                lambda: client.get(url),
                on_error=lambda e: FetchError(str(e)),
            )
    """
    async def run() -> Outcome[T]:
        try:
            return Ok(await thunk())
        except Exception as exc:
            return Error(on_error(exc))

    return DeferredK(run)


__all__ = (
    "pure",
    "fail",
    "from_result",
    "optional",
    "catching",
    "catching_async",
)
