class SchedulerError(Exception):
    """Base class for everything the scheduler raises on its own behalf."""


class TaskFailure(SchedulerError):
    """
    A task step raised and could not produce a result.

    The original exception is kept as ``__cause__``, so the traceback shows
    both the scheduler frame and the task's own frame.
    """

    def __init__(self, task_name: str, message: str | None = None) -> None:
        self.task_name = task_name
        super().__init__(message or f"task {task_name!r} failed")
