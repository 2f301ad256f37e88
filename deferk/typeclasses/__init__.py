"""
Capabilities
============

Each layer adds operations on top of the one below:

    Functor -> Applicative -> Monad ─────────┐
                   └──────> ApplicativeError ─┴> MonadError
    MonadError -> MonadSuspend -> Async -> Effect
"""

from .applicative import Applicative
from .asynchronous import Async
from .effect import Effect
from .error import ApplicativeError, MonadError
from .functor import Functor
from .monad import Monad
from .suspend import MonadSuspend

__all__ = (
    "Functor",
    "Applicative",
    "Monad",
    "ApplicativeError",
    "MonadError",
    "MonadSuspend",
    "Async",
    "Effect",
)
