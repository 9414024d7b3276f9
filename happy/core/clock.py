import time
from typing import Callable


Clock = Callable[[], int]


def monotonic_us() -> int:
    return time.monotonic_ns() // 1000
