from contextlib import contextmanager
import logging

from coop_scheduling.clock import Clock, MonotonicClock

logger = logging.getLogger(__name__)


class Stopwatch:
    """Filled in by ``timer`` once the ``with`` block exits."""

    def __init__(self, started_at: float) -> None:
        self.started_at = started_at
        self.elapsed: float | None = None


@contextmanager
def timer(clock: Clock | None = None, label: str | None = None):
    """
    Usage:
        >>> with timer() as stopwatch:
        ...     # example: simulate a long-running operation
        ...     time.sleep(1)
        ...
        elapsed time: 1.00 seconds
        >>> round(stopwatch.elapsed)
        1

    """
    clock = clock or MonotonicClock()
    stopwatch = Stopwatch(started_at=clock.now())
    try:
        yield stopwatch
    finally:
        stopwatch.elapsed = clock.now() - stopwatch.started_at
        prefix = f"{label}: " if label else ""
        logger.info("%selapsed time: %.2f seconds", prefix, stopwatch.elapsed)
