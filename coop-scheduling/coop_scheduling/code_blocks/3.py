from coop_scheduling.config import Settings
from coop_scheduling.logging_setup import setup_logging
from coop_scheduling.scheduler import Scheduler
from coop_scheduling.task import brew_step


def main():
    settings = Settings.from_env()
    setup_logging(settings.log_level)

    scheduler = Scheduler(clock=settings.make_clock())
    run_result = scheduler.run(
        [
            brew_step("boil water", seconds=2),
            brew_step("grind beans", seconds=4),
            brew_step("warm cups", seconds=1),
        ]
    )
    # > started boil water
    # > started grind beans
    # > started warm cups
    # > finished warm cups
    # > finished boil water
    # > finished grind beans
    # > run: elapsed time: 4.00 seconds

    # Tasks start in submission order and finish in order of their waits,
    # but the results are always in submission order.
    print(run_result.started)
    # > ['boil water', 'grind beans', 'warm cups']
    print(run_result.completed)
    # > ['warm cups', 'boil water', 'grind beans']
    print(run_result.results)
    # > ['boil water done', 'grind beans done', 'warm cups done']


if __name__ == "__main__":
    main()
