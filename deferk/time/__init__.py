from .delay import delay, sleep
from .timeout import timeout

__all__ = (
    # Delay
    "delay",
    "sleep",
    # Timeout
    "timeout",
)
