import enum
import logging
from typing import Any, Callable, Literal, Sequence, Union

import pydantic

from coop_scheduling.clock import Clock

logger = logging.getLogger(__name__)


class Wait(pydantic.BaseModel):
    """A request to wait ``seconds``, either yielding to the loop or holding it."""

    model_config = pydantic.ConfigDict(frozen=True)

    seconds: pydantic.NonNegativeFloat
    blocking: bool = False


@pydantic.validate_call
def sleep(seconds: pydantic.NonNegativeFloat) -> Wait:
    # the cooperative wait: other tasks run meanwhile
    return Wait(seconds=seconds)


@pydantic.validate_call
def block(seconds: pydantic.NonNegativeFloat) -> Wait:
    # the time.sleep inside a coroutine mistake: nobody else runs meanwhile
    return Wait(seconds=seconds, blocking=True)


class Suspended(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(frozen=True)

    kind: Literal["suspended"] = "suspended"
    resume_after: pydantic.NonNegativeFloat


class Blocked(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(frozen=True)

    kind: Literal["blocked"] = "blocked"
    duration: pydantic.NonNegativeFloat


class Done(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(frozen=True)

    kind: Literal["done"] = "done"
    result: Any = None


StepOutcome = Union[Suspended, Blocked, Done]

Stage = Union[Wait, Callable[[], Any]]


class TaskStatus(str, enum.Enum):
    PENDING = "pending"
    RUNNING = "running"
    SUSPENDED = "suspended"
    DONE = "done"
    FAILED = "failed"


class Task:
    """
    One unit of example work, e.g. "boil water", as an explicit state machine.

    ``steps`` is walked in order. A ``Wait`` ends the current step; a plain
    callable is a synchronous side effect and never yields, so any number of
    them run back to back within one step. When the stages run out the task
    is done, with ``result`` (or ``result()`` if it is callable) as its value.

    Nothing here knows about other tasks: the scheduler decides when ``step``
    is called and what a returned outcome means for everyone else.
    """

    def __init__(
        self,
        name: str,
        steps: Sequence[Stage] = (),
        result: Any = None,
    ) -> None:
        if not name:
            raise ValueError("task name must not be empty")
        for stage in steps:
            if not isinstance(stage, Wait) and not callable(stage):
                raise TypeError(
                    f"task {name!r}: stage {stage!r} is neither a Wait nor callable"
                )
        self.name = name
        self.steps = tuple(steps)
        self.result = result
        self.reset()

    def __repr__(self) -> str:
        return f"<Task {self.name!r} status={self.status.value} stage={self.stage}>"

    def reset(self) -> None:
        self.status = TaskStatus.PENDING
        self.stage = 0

    @property
    def finished(self) -> bool:
        return self.status in (TaskStatus.DONE, TaskStatus.FAILED)

    def step(self, clock: Clock) -> StepOutcome:
        """
        Advance by one stage.

        Returns:
            Suspended: the task reached a non-blocking wait.
            Blocked: the task held the thread for a blocking wait, which has
                already elapsed on ``clock`` by the time this returns.
            Done: no stages left.

        Raises:
            RuntimeError: the task has already finished.
            Exception: whatever a callable stage or the result factory raised;
                the task is marked failed first.
        """
        if self.finished:
            raise RuntimeError(f"task {self.name!r} is already {self.status.value}")

        if self.status is TaskStatus.PENDING:
            logger.info("started %s", self.name)
        self.status = TaskStatus.RUNNING

        try:
            while self.stage < len(self.steps):
                stage = self.steps[self.stage]
                self.stage += 1

                if not isinstance(stage, Wait):
                    stage()
                    continue

                if stage.blocking:
                    clock.sleep(stage.seconds)
                    return Blocked(duration=stage.seconds)

                self.status = TaskStatus.SUSPENDED
                return Suspended(resume_after=stage.seconds)

            result = self.result() if callable(self.result) else self.result
        except Exception:
            self.status = TaskStatus.FAILED
            raise

        self.status = TaskStatus.DONE
        logger.info("finished %s", self.name)
        return Done(result=result)


@pydantic.validate_call
def brew_step(
    name: str,
    seconds: pydantic.NonNegativeFloat,
    blocking: bool = False,
    result: Any = None,
) -> Task:
    """
    The shape every article example has: announce, wait once, announce, return.

    ``result`` defaults to ``"<name> done"``.
    """
    wait = block(seconds) if blocking else sleep(seconds)
    return Task(
        name=name,
        steps=[wait],
        result=f"{name} done" if result is None else result,
    )
