import time
from typing import Protocol

import pydantic


class Clock(Protocol):
    def now(self) -> float: ...

    def sleep(self, seconds: float) -> None: ...


class MonotonicClock:
    """Real time. ``sleep`` blocks the calling thread, like ``time.sleep``."""

    def now(self) -> float:
        return time.perf_counter()

    def sleep(self, seconds: float) -> None:
        if seconds > 0:
            time.sleep(seconds)


class VirtualClock:
    """
    Time that only moves when somebody sleeps on it.

    Usage:
        >>> clock = VirtualClock()
        >>> clock.sleep(2)
        >>> clock.now()
        2.0

    """

    @pydantic.validate_call
    def __init__(self, start: pydantic.NonNegativeFloat = 0.0) -> None:
        self._now = float(start)

    def now(self) -> float:
        return self._now

    def sleep(self, seconds: float) -> None:
        if seconds > 0:
            self._now += seconds
