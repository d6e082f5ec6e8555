"""Initialize project command."""

import click

from ..db import get_db_path, init_db, seed_exercises
from ..services.workout import WorkoutService
from .base import async_command, echo_info, echo_success, get_data_dir


@click.command()
@async_command
async def init():
    """Initialize the wave-lift database.

    Creates the data directory and the SQLite database, installs the default
    exercise library and places you at Week 1, Heavy day, Cycle 1.
    """
    data_dir = get_data_dir()
    db_path = get_db_path(data_dir)

    echo_info(f"Initializing wave-lift in {data_dir}")

    await init_db(db_path)
    echo_success("Database initialized")

    added = await seed_exercises(db_path)
    echo_success(f"Exercise library populated ({added} new exercises)")

    async with WorkoutService(db_path) as service:
        position = await service.current_position()
    echo_success(f"Current position: {position.get_position_display()}")

    click.echo()
    click.echo("wave-lift is ready to use!")
    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Set your baseline weights:")
    click.echo('     wave-lift weights set "Squat" 100')
    click.echo()
    click.echo("  2. Start today's workout:")
    click.echo("     wave-lift workout start")
