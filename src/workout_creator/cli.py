"""CLI entry point for workout-creator."""

import click

from .commands import example, init, workouts
from .config import get_settings
from .core.logger import setup_logger


@click.group()
@click.version_option(version="0.1.0", prog_name="workout-creator")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """workout-creator: build workouts from intervals and exercises.

    Example usage:

        # Initialize the database
        workout-creator init

        # Add the sample workout and look at it
        workout-creator example
        workout-creator workouts list
        workout-creator workouts show 3f2a
    """
    settings = get_settings()
    setup_logger(level="DEBUG" if verbose else settings.log_level, log_file=settings.log_file)


# Register commands
main.add_command(init)
main.add_command(example)
main.add_command(workouts)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
