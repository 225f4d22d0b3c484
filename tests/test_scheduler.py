import logging

import pytest

from coop_scheduling.clock import VirtualClock
from coop_scheduling.errors import SchedulerError, TaskFailure
from coop_scheduling.scheduler import Scheduler, run
from coop_scheduling.task import Task, TaskStatus, brew_step, sleep


def test_two_sleeps_overlap(clock):
    """Two non-blocking waits of 1 and 2 take 2 in total."""
    result = Scheduler(clock=clock).run(
        [brew_step("task1", seconds=1), brew_step("task2", seconds=2)]
    )
    assert result.elapsed == 2
    assert result.results == ["task1 done", "task2 done"]


def test_blocking_wait_serializes(clock):
    """A blocking wait of 1 in front of a sleep of 2 takes 3 in total."""
    result = Scheduler(clock=clock).run(
        [
            brew_step("task1", seconds=1, blocking=True),
            brew_step("task2", seconds=2),
        ]
    )
    assert result.elapsed == 3
    assert result.results == ["task1 done", "task2 done"]


def test_blocking_is_slower_than_sleeping():
    def tasks(blocking):
        return [
            brew_step("task1", seconds=1, blocking=blocking),
            brew_step("task2", seconds=2),
        ]

    sleeping = run(tasks(False), clock=VirtualClock())
    blocking = run(tasks(True), clock=VirtualClock())
    assert blocking.elapsed > sleeping.elapsed


def test_three_sleeps_start_in_order_and_finish_by_duration(clock):
    result = run(
        [
            brew_step("first", seconds=2),
            brew_step("second", seconds=4),
            brew_step("third", seconds=1),
        ],
        clock=clock,
    )
    assert result.elapsed == 4
    assert result.started == ["first", "second", "third"]
    assert result.completed == ["third", "first", "second"]
    assert result.results == ["first done", "second done", "third done"]


def test_results_follow_registration_not_completion(clock):
    slow = brew_step("slow", seconds=5)
    fast = brew_step("fast", seconds=1)

    assert run([slow, fast], clock=clock).results == ["slow done", "fast done"]
    assert run([fast, slow], clock=VirtualClock()).results == ["fast done", "slow done"]


def test_simultaneous_wakeups_resume_in_registration_order(clock):
    tasks = [brew_step(name, seconds=1) for name in ("a", "b", "c")]
    result = run(tasks, clock=clock)
    assert result.completed == ["a", "b", "c"]
    assert result.elapsed == 1


def test_blocked_task_queues_behind_already_ready_tasks(clock):
    """After blocking, a task goes back in line behind tasks that were already ready."""
    order = []
    tasks = [
        Task("kettle", steps=[sleep(0), lambda: order.append("kettle")]),
        Task("grinder", steps=[lambda: order.append("grinder")]),
    ]
    tasks.insert(0, brew_step("stove", seconds=1, blocking=True))

    result = run(tasks, clock=clock)
    assert result.started == ["stove", "kettle", "grinder"]
    # "grinder" was ready since t=0, "stove" only again at t=1
    assert order == ["grinder", "kettle"]
    assert result.completed == ["grinder", "stove", "kettle"]
    assert result.elapsed == 1


def test_multi_stage_task_interleaves(clock):
    events = []

    def mark(label):
        return lambda: events.append((label, clock.now()))

    tasks = [
        Task("a", steps=[mark("a0"), sleep(1), mark("a1"), sleep(1), mark("a2")]),
        Task("b", steps=[mark("b0"), sleep(1.5), mark("b1")]),
    ]
    result = run(tasks, clock=clock)
    assert events == [
        ("a0", 0),
        ("b0", 0),
        ("a1", 1),
        ("b1", 1.5),
        ("a2", 2),
    ]
    assert result.elapsed == 2


def test_running_twice_gives_the_same_answer(clock):
    tasks = [brew_step("a", seconds=2), brew_step("b", seconds=1, blocking=True)]
    scheduler = Scheduler(clock=clock)

    first = scheduler.run(tasks)
    second = scheduler.run(tasks)

    assert first.results == second.results
    assert first.completed == second.completed
    assert first.elapsed == second.elapsed == 2
    assert all(task.status is TaskStatus.DONE for task in tasks)


def test_empty_run(clock):
    result = run([], clock=clock)
    assert result.results == []
    assert result.elapsed == 0


def test_duplicate_registration_is_rejected(clock):
    task = brew_step("a", seconds=1)
    with pytest.raises(ValueError):
        run([task, task], clock=clock)


def test_failure_stops_everything(clock):
    stepped = []

    def boom():
        raise ValueError("the jug slipped")

    tasks = [
        Task("late", steps=[sleep(2), lambda: stepped.append("late")]),
        Task("faulty", steps=[sleep(1), boom]),
        Task("after", steps=[sleep(1), lambda: stepped.append("after")]),
    ]
    scheduler = Scheduler(clock=clock)

    with pytest.raises(TaskFailure) as excinfo:
        scheduler.run(tasks)

    assert isinstance(excinfo.value, SchedulerError)
    assert excinfo.value.task_name == "faulty"
    assert isinstance(excinfo.value.__cause__, ValueError)
    assert stepped == []
    assert tasks[1].status is TaskStatus.FAILED
    assert clock.now() == 1
    # nothing is left behind for the next run
    assert not scheduler.ready
    assert not scheduler.timers


def test_failure_in_result_factory(clock):
    def no_result():
        raise KeyError("beans")

    with pytest.raises(TaskFailure, match="'empty'"):
        run([Task("empty", result=no_result)], clock=clock)


def test_elapsed_is_logged(clock, caplog):
    caplog.set_level(logging.INFO)
    run([brew_step("a", seconds=2)], clock=clock)
    assert "run: elapsed time: 2.00 seconds" in caplog.text


def test_real_clock_sleeps_overlap():
    """On the real clock, two sleeps take about as long as the longer one."""
    result = run([brew_step("a", seconds=0.1), brew_step("b", seconds=0.2)])
    assert 0.2 <= result.elapsed < 0.28
    assert result.results == ["a done", "b done"]


def test_real_clock_blocking_adds_up():
    result = run(
        [brew_step("a", seconds=0.1, blocking=True), brew_step("b", seconds=0.2)]
    )
    assert 0.3 <= result.elapsed < 0.38
    assert result.completed == ["a", "b"]
