"""
Either - loop state for stack-safe recursion
============================================

``Left(a)`` means "continue with a", ``Right(b)`` means "done with b".
Used by ``tail_rec_m``; success/failure outcomes use ``kungfu.Result``.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Left[A]:
    value: A


@dataclass(frozen=True, slots=True)
class Right[B]:
    value: B


type Either[A, B] = Left[A] | Right[B]


__all__ = ("Either", "Left", "Right")
