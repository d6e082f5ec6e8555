"""CLI entry point for wave-lift."""

import click

from .commands import cardio, init, progress, serve, weights, workout
from .commands.progress import status
from .config import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="wave-lift")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
def main(verbose: bool):
    """wave-lift: 5-week wave strength and cardio tracker.

    Prescribes weight and reps from where you are in the cycle, grades each
    set against target and raises your baseline when you earn it.

    Example usage:

        # Initialize the project
        wave-lift init

        # Set a baseline and train
        wave-lift weights set Squat 100
        wave-lift workout start
        wave-lift workout log 1 Squat

        # Log cardio
        wave-lift cardio log Cycling 45
    """
    configure_logging("DEBUG" if verbose else None)


# Register commands
main.add_command(init)
main.add_command(status)
main.add_command(progress)
main.add_command(weights)
main.add_command(workout)
main.add_command(cardio)
main.add_command(serve)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
