from coop_scheduling.config import Settings
from coop_scheduling.errors import TaskFailure
from coop_scheduling.logging_setup import setup_logging
from coop_scheduling.scheduler import Scheduler
from coop_scheduling.task import Task, brew_step, sleep


def main():
    settings = Settings.from_env()
    setup_logging(settings.log_level)

    def spill_milk():
        raise ValueError("the jug slipped")

    scheduler = Scheduler(clock=settings.make_clock())
    try:
        scheduler.run(
            [
                brew_step("boil water", seconds=2),
                Task("froth milk", steps=[sleep(1), spill_milk]),
            ]
        )
    except TaskFailure as e:
        # Nothing is retried and no partial results come back:
        # the first failure ends the whole run.
        print(f"{e} (caused by {e.__cause__!r})")
        # > task 'froth milk' failed: ValueError('the jug slipped') (caused by ValueError('the jug slipped'))

    # > started boil water
    # > started froth milk
    # > task froth milk failed: ValueError('the jug slipped')
    # > run: elapsed time: 1.00 seconds
    # "boil water" never finishes


if __name__ == "__main__":
    main()
