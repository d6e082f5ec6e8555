"""Baseline weight commands."""

import click

from ..models.exercises import Exercise
from ..services.errors import NotFoundError
from ..services.workout import WorkoutService
from .base import (
    async_command,
    echo_success,
    ensure_initialized,
    format_table,
    format_weight,
    handle_errors,
)


async def resolve_exercise(service: WorkoutService, value: str) -> Exercise:
    """Look up an exercise by ID, name or alias."""
    if value.isdigit():
        return await service.get_exercise(int(value))
    exercise = await service.exercises.find(value)
    if exercise is None:
        raise NotFoundError(f"Exercise '{value}' not found")
    return exercise


@click.group()
def weights():
    """View and edit baseline (Heavy day) weights."""
    pass


@weights.command("list")
@click.pass_context
@async_command
async def list_weights(ctx: click.Context):
    """Show each exercise's baseline and today's target."""
    ensure_initialized(ctx)

    async with WorkoutService() as service:
        position = await service.current_position()
        exercises = {ex.id: ex for ex in await service.list_exercises()}
        targets = await service.targets(position)

    click.echo(click.style(position.get_position_display(), bold=True))
    rows = [
        [
            str(t.exercise_id),
            exercises[t.exercise_id].name,
            format_weight(t.prescribed_weight),
            f"{format_weight(t.target_weight)} × {t.target_reps}",
        ]
        for t in targets
    ]
    click.echo(format_table(["ID", "Exercise", "Baseline", "Today"], rows))


@weights.command("set")
@click.argument("exercise")
@click.argument("weight", type=float)
@click.pass_context
@handle_errors
@async_command
async def set_weight(ctx: click.Context, exercise: str, weight: float):
    """Set the baseline weight for EXERCISE (ID or name)."""
    ensure_initialized(ctx)

    async with WorkoutService() as service:
        target = await resolve_exercise(service, exercise)
        await service.set_weight(target.id, weight)

    echo_success(f"{target.name} baseline set to {format_weight(weight)}")
