# roomchat/core/clock.py
import time
from typing import Callable

Clock = Callable[[], int]


def now_ms() -> int:
    """Wall-clock time in integer milliseconds since the epoch."""
    return int(time.time() * 1000)
