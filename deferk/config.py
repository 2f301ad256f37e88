"""
Runtime configuration
=====================

Settings for the shared execution context, overridable from the environment.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

MAX_WORKERS_ENV = "DEFERK_MAX_WORKERS"
THREAD_NAME_PREFIX_ENV = "DEFERK_THREAD_NAME_PREFIX"


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """
    Configuration of a thread-pool execution context.
    """

    max_workers: int = 4
    thread_name_prefix: str = "deferk"

    def __post_init__(self) -> None:
        if self.max_workers < 1:
            raise ValueError("RuntimeConfig.max_workers must be >= 1")
        if not self.thread_name_prefix:
            raise ValueError("RuntimeConfig.thread_name_prefix must not be empty")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> RuntimeConfig:
        """Read overrides from DEFERK_* variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        defaults = cls()

        raw_workers = env.get(MAX_WORKERS_ENV)
        if raw_workers is None or not raw_workers.strip():
            max_workers = defaults.max_workers
        else:
            try:
                max_workers = int(raw_workers)
            except ValueError:
                raise ValueError(
                    f"{MAX_WORKERS_ENV} must be an integer, got {raw_workers!r}"
                ) from None

        prefix = env.get(THREAD_NAME_PREFIX_ENV) or defaults.thread_name_prefix
        return cls(max_workers=max_workers, thread_name_prefix=prefix)


__all__ = (
    "MAX_WORKERS_ENV",
    "THREAD_NAME_PREFIX_ENV",
    "RuntimeConfig",
)
