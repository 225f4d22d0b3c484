from coop_scheduling.clock import VirtualClock
from coop_scheduling.logging_setup import setup_logging
from coop_scheduling.scheduler import run
from coop_scheduling.task import brew_step


# Waiting for real seconds gets old fast.
# A virtual clock only moves when the scheduler idles or a task blocks,
# so the same scenarios finish instantly and report exact timings.
def main():
    setup_logging("WARNING")

    scenarios = {
        "two sleeps": [
            brew_step("boil water", seconds=1),
            brew_step("grind beans", seconds=2),
        ],
        "block then sleep": [
            brew_step("boil water", seconds=1, blocking=True),
            brew_step("grind beans", seconds=2),
        ],
        "three sleeps": [
            brew_step("boil water", seconds=2),
            brew_step("grind beans", seconds=4),
            brew_step("warm cups", seconds=1),
        ],
    }

    for title, tasks in scenarios.items():
        run_result = run(tasks, clock=VirtualClock())
        print(f"{title}: {run_result.elapsed:.2f} seconds, finished {run_result.completed}")

    # > two sleeps: 2.00 seconds, finished ['boil water', 'grind beans']
    # > block then sleep: 3.00 seconds, finished ['boil water', 'grind beans']
    # > three sleeps: 4.00 seconds, finished ['warm cups', 'boil water', 'grind beans']


if __name__ == "__main__":
    main()
