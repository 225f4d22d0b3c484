import heapq
import logging
from typing import Any, Sequence

import pydantic

from coop_scheduling.clock import Clock, MonotonicClock
from coop_scheduling.errors import TaskFailure
from coop_scheduling.task import Blocked, Done, Suspended, Task, TaskStatus
from coop_scheduling.timeit import timer

logger = logging.getLogger(__name__)


class RunResult(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(frozen=True)

    # in registration order, not completion order
    results: list[Any]
    elapsed: pydantic.NonNegativeFloat
    started: list[str]
    completed: list[str]


class Scheduler:
    """
    A single-threaded cooperative loop over a fixed set of tasks.

    Tasks wait in one of two heaps: ``ready``, keyed by the moment they became
    runnable, and ``timers``, keyed by the moment they may resume. Both break
    ties by registration index, so tasks that become ready together resume in
    the order they were submitted.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self.clock = clock or MonotonicClock()
        self.ready: list[tuple[float, int]] = []
        self.timers: list[tuple[float, int]] = []

    def run(self, tasks: Sequence[Task]) -> RunResult:
        """
        Drive ``tasks`` to completion.

        Raises:
            TaskFailure: a task step raised. Nothing else is stepped after it.
            ValueError: the same task object was passed twice.
        """
        tasks = list(tasks)
        if len({id(task) for task in tasks}) != len(tasks):
            raise ValueError("the same task was registered more than once")

        results: dict[int, Any] = {}
        started: list[str] = []
        completed: list[str] = []

        with timer(self.clock, label="run") as stopwatch:
            try:
                self._register(tasks)
                while self.ready or self.timers:
                    self._turn(tasks, results, started, completed)
            finally:
                self.ready.clear()
                self.timers.clear()

        return RunResult(
            results=[results[index] for index in range(len(tasks))],
            elapsed=stopwatch.elapsed,
            started=started,
            completed=completed,
        )

    def _register(self, tasks: list[Task]) -> None:
        now = self.clock.now()
        for index, task in enumerate(tasks):
            task.reset()
            heapq.heappush(self.ready, (now, index))
        logger.debug("registered %d tasks", len(tasks))

    def _promote_due_timers(self) -> None:
        now = self.clock.now()
        while self.timers and self.timers[0][0] <= now:
            heapq.heappush(self.ready, heapq.heappop(self.timers))

    def _turn(
        self,
        tasks: list[Task],
        results: dict[int, Any],
        started: list[str],
        completed: list[str],
    ) -> None:
        self._promote_due_timers()

        if not self.ready:
            when, _ = self.timers[0]
            delay = when - self.clock.now()
            logger.debug("nothing ready, idling %.3f seconds", delay)
            self.clock.sleep(delay)
            return

        _, index = heapq.heappop(self.ready)
        task = tasks[index]
        if task.status is TaskStatus.PENDING:
            started.append(task.name)

        try:
            outcome = task.step(self.clock)
        except Exception as e:
            logger.error("task %s failed: %r", task.name, e)
            raise TaskFailure(task.name, f"task {task.name!r} failed: {e!r}") from e

        if isinstance(outcome, Suspended):
            resume_at = self.clock.now() + outcome.resume_after
            logger.debug("%s suspended for %.3f seconds", task.name, outcome.resume_after)
            heapq.heappush(self.timers, (resume_at, index))
        elif isinstance(outcome, Blocked):
            logger.debug("%s held the loop for %.3f seconds", task.name, outcome.duration)
            heapq.heappush(self.ready, (self.clock.now(), index))
        elif isinstance(outcome, Done):
            results[index] = outcome.result
            completed.append(task.name)


def run(tasks: Sequence[Task], clock: Clock | None = None) -> RunResult:
    """Build a fresh scheduler for ``tasks`` and run it."""
    return Scheduler(clock=clock).run(tasks)
