"""
Lift helpers with semantic namespaces.

    from deferk import lift as L

    # Lifting values
    user = L.up.pure(User(id=42))
    error = L.up.fail(NotFoundError())
    maybe = L.up.optional(db_result, error=NotFound)

    # Observing
    result = await L.down.to_result(user)
    value = await L.down.unsafe(user)
"""

from __future__ import annotations

from . import down, up

from .down import or_else, to_result, unsafe
from .up import catching, catching_async, fail, from_result, optional, pure

__all__ = (
    # Namespaces (L.up.*, L.down.*)
    "up",
    "down",
    # Up
    "pure",
    "fail",
    "from_result",
    "optional",
    "catching",
    "catching_async",
    # Down
    "to_result",
    "unsafe",
    "or_else",
)
