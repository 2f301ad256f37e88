from __future__ import annotations

class TimeoutError(Exception):
    """Deferred value took too long."""

    seconds: float

    def __init__(self, seconds: float) -> None:
        self.seconds = seconds
        super().__init__(f"Timed out after {seconds}s")

class ContextClosedError(Exception):
    """Work submitted to an execution context that was shut down."""

    name: str

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Execution context {name!r} is shut down")

__all__ = ("ContextClosedError", "TimeoutError")
