"""
Capability hierarchy for deferred asynchronous computations.

DeferredK is a lazy, memoized, asyncio-backed computation producing
``kungfu.Result[T, Exception]``. Capabilities (Functor, Monad,
ApplicativeError, MonadError, MonadSuspend, Async, Effect) are abstract
classes; DeferredK instances for each are obtained through accessors:

    from deferk import DeferredK, instances

    M = instances.monad()
    result = await M.flat_map(DeferredK.pure(1), lambda x: DeferredK.pure(x + 1))
    # Ok(2)
"""

# Core types
from ._types import Callback, Kind, Outcome, Proc, Thunk
from .deferred import DeferredK
from .either import Either, Left, Right
from .promise import Promise

# Scheduling
from .config import RuntimeConfig
from .context import (
    ExecutionContext,
    ImmediateContext,
    LoopContext,
    ThreadPoolContext,
    default_context,
    shutdown_default_context,
)

# Capabilities
from . import typeclasses
from .typeclasses import (
    Applicative,
    ApplicativeError,
    Async,
    Effect,
    Functor,
    Monad,
    MonadError,
    MonadSuspend,
)

# DeferredK instances
from . import instances
from .instances import (
    DeferredKApplicative,
    DeferredKApplicativeError,
    DeferredKAsync,
    DeferredKEffect,
    DeferredKFunctor,
    DeferredKMonad,
    DeferredKMonadError,
    DeferredKMonadSuspend,
)

# Lift helpers
from . import lift

# Time
from . import time
from .time import delay, sleep, timeout

# Errors
from ._errors import ContextClosedError, TimeoutError

__all__ = (
    # Types
    "Callback",
    "Kind",
    "Outcome",
    "Proc",
    "Thunk",
    "DeferredK",
    "Either",
    "Left",
    "Right",
    "Promise",
    # Scheduling
    "RuntimeConfig",
    "ExecutionContext",
    "ImmediateContext",
    "LoopContext",
    "ThreadPoolContext",
    "default_context",
    "shutdown_default_context",
    # Capabilities
    "typeclasses",
    "Functor",
    "Applicative",
    "Monad",
    "ApplicativeError",
    "MonadError",
    "MonadSuspend",
    "Async",
    "Effect",
    # Instances
    "instances",
    "DeferredKFunctor",
    "DeferredKApplicative",
    "DeferredKMonad",
    "DeferredKApplicativeError",
    "DeferredKMonadError",
    "DeferredKMonadSuspend",
    "DeferredKAsync",
    "DeferredKEffect",
    # Lift
    "lift",
    # Time
    "time",
    "delay",
    "sleep",
    "timeout",
    # Errors
    "ContextClosedError",
    "TimeoutError",
)
