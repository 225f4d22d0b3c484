from coop_scheduling.config import Settings
from coop_scheduling.logging_setup import setup_logging
from coop_scheduling.scheduler import Scheduler
from coop_scheduling.task import brew_step


# Two tasks, each with one non-blocking wait.
# While "boil water" waits, the scheduler is free to start "grind beans",
# so the waits overlap and the whole run takes as long as the longest wait.
def main():
    settings = Settings.from_env()
    setup_logging(settings.log_level)

    scheduler = Scheduler(clock=settings.make_clock())
    run_result = scheduler.run(
        [
            brew_step("boil water", seconds=1),
            brew_step("grind beans", seconds=2),
        ]
    )
    # > started boil water
    # > started grind beans
    # > finished boil water
    # > finished grind beans
    # > run: elapsed time: 2.00 seconds

    print(run_result.results)
    # > ['boil water done', 'grind beans done']


if __name__ == "__main__":
    main()
