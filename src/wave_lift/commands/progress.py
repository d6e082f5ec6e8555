"""Cycle position commands."""

from datetime import date

import click

from ..models.cycle import CyclePosition, DayType
from ..services.cardio import CardioService
from ..services.workout import WorkoutService
from .base import (
    async_command,
    echo_info,
    echo_success,
    echo_warning,
    ensure_initialized,
    format_table,
    format_weight,
    handle_errors,
)

DAY_CHOICES = [d.value for d in DayType]


@click.group()
def progress():
    """Track your position in the 5-week wave.

    Each week has a Heavy, Medium and Light day. Finishing a workout moves
    you to the next day; after Week 5 Light a new cycle starts at Week 1.
    """
    pass


@progress.command("status")
@click.pass_context
@async_command
async def status(ctx: click.Context):
    """Show the current position, today's targets and weekly adherence."""
    ensure_initialized(ctx)
    today = date.today()

    async with WorkoutService() as service:
        position = await service.current_position()
        exercises = {ex.id: ex for ex in await service.list_exercises()}
        targets = await service.targets(position)
        count = await service.weekly_workout_count(today)
    adherence = await CardioService().adherence(today)

    click.echo()
    click.echo(click.style(position.get_position_display(), bold=True))
    click.echo("=" * 50)

    click.echo()
    click.echo(click.style("Next Workout:", bold=True))
    rows = [
        [
            exercises[t.exercise_id].name,
            f"{format_weight(t.target_weight)} × {t.target_reps}",
            format_weight(t.prescribed_weight),
        ]
        for t in targets
    ]
    click.echo(format_table(["Exercise", "Target", "Baseline"], rows))
    if position.week == 5 and position.day_type == DayType.HEAVY:
        echo_info("Level-up day: hit target on both sets to raise your baseline by 10%.")

    click.echo()
    click.echo(click.style("This Week:", bold=True))
    click.echo(f"  Workouts: {count}/3")
    click.echo(
        f"  Zone 2: {adherence.aerobic_minutes:g}/{adherence.aerobic_target_minutes} min"
    )
    click.echo(f"  4x4 due: {adherence.next_interval_due.strftime('%a, %b %d, %Y')}")
    if adherence.is_interval_overdue(today):
        echo_warning("4x4 session is overdue")


@progress.command("set")
@click.option("-w", "--week", type=int, required=True, help="Week number (1-5)")
@click.option(
    "-d", "--day", "day_type", type=click.Choice(DAY_CHOICES), required=True, help="Day type"
)
@click.option("-c", "--cycle", type=int, help="Cycle number (default: current)")
@click.pass_context
@handle_errors
@async_command
async def set_position(ctx: click.Context, week: int, day_type: str, cycle):
    """Set position to a specific week and day.

    Useful for going back or syncing with actual progress.
    """
    ensure_initialized(ctx)

    async with WorkoutService() as service:
        if cycle is None:
            cycle = (await service.current_position()).cycle_number
        position = await service.set_position(
            CyclePosition(week=week, day_type=DayType(day_type), cycle_number=cycle)
        )

    echo_success(f"Position set to {position.get_position_display()}")


@progress.command("reset")
@click.pass_context
@async_command
async def reset(ctx: click.Context):
    """Go back to Week 1, Heavy day, Cycle 1."""
    ensure_initialized(ctx)

    if not click.confirm("Reset to Week 1 of Cycle 1?"):
        return

    async with WorkoutService() as service:
        position = await service.reset_progress()

    echo_success(f"Position reset to {position.get_position_display()}")
