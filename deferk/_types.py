"""
Core type definitions for deferk.

Aliases shared across the library.
"""

from __future__ import annotations

import typing
from collections.abc import Callable, Coroutine

from kungfu import Result

# ============================================================================
# Type aliases
# ============================================================================

# Outcome = what every deferred computation finally produces
type Outcome[T] = Result[T, Exception]

# Thunk = zero-argument function evaluated lazily
type Thunk[T] = Callable[[], T]

# Callback = receives the outcome of an asynchronous producer exactly once
type Callback[T] = Callable[[Outcome[T]], None]

# Proc = callback-style asynchronous producer registered by Async.async_
type Proc[T] = Callable[[Callback[T]], None]

# Predicate = function that tests a value
type Predicate[T] = Callable[[T], bool]

# Work = unit of work submitted to an execution context
type Work = Callable[[], None]

# Kind = some F[A]; Python has no higher-kinded types, so capability
# signatures stay loose and instances narrow them
type Kind[F, A] = typing.Any

# ============================================================================
# Concrete type shortcuts
# ============================================================================

# Runner = the coroutine factory wrapped by DeferredK
type Runner[T] = Callable[[], Coroutine[typing.Any, typing.Any, Outcome[T]]]

__all__ = (
    "Outcome",
    "Thunk",
    "Callback",
    "Proc",
    "Predicate",
    "Work",
    "Kind",
    "Runner",
)
