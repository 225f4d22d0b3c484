from coop_scheduling.config import Settings
from coop_scheduling.logging_setup import setup_logging
from coop_scheduling.scheduler import Scheduler
from coop_scheduling.task import brew_step


# The same two tasks, but "boil water" now waits the wrong way:
# the blocking wait never hands control back, so "grind beans"
# cannot even start until the kettle is done.
def main():
    settings = Settings.from_env()
    setup_logging(settings.log_level)

    scheduler = Scheduler(clock=settings.make_clock())
    run_result = scheduler.run(
        [
            brew_step("boil water", seconds=1, blocking=True),
            brew_step("grind beans", seconds=2),
        ]
    )
    # > started boil water
    # (one second of nothing else happening)
    # > started grind beans
    # > finished boil water
    # > finished grind beans
    # > run: elapsed time: 3.00 seconds

    # Results still come back in submission order
    print(run_result.results)
    # > ['boil water done', 'grind beans done']


if __name__ == "__main__":
    main()
