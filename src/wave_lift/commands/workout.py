"""Strength workout commands."""

import click

from ..services.workout import SetResult, WorkoutPlan, WorkoutService
from .base import (
    async_command,
    echo_info,
    echo_success,
    ensure_initialized,
    format_table,
    format_weight,
    handle_errors,
)
from .weights import resolve_exercise


@click.group()
def workout():
    """Start, log and finish strength workouts.

    Each exercise gets 2 working sets. Reps follow the week (8/6/4/3/2) and
    weight follows the day type (Heavy 100%, Medium 85%, Light 70% of the
    baseline). On Week 5 Heavy day, meeting target on both sets raises the
    baseline by 10%.
    """
    pass


@workout.command("start")
@click.option("--date", "workout_date", type=click.DateTime(formats=["%Y-%m-%d"]))
@click.pass_context
@handle_errors
@async_command
async def start(ctx: click.Context, workout_date):
    """Start a workout at the current position."""
    ensure_initialized(ctx)

    async with WorkoutService() as service:
        plan = await service.start_workout(workout_date.date() if workout_date else None)

    echo_success(f"Started workout {plan.session.id}")
    _print_plan(plan)
    click.echo()
    click.echo(f"Log sets with: wave-lift workout log {plan.session.id} <exercise>")


@workout.command("show")
@click.argument("session_id", type=int)
@click.pass_context
@handle_errors
@async_command
async def show(ctx: click.Context, session_id: int):
    """Show a workout's prescribed and logged sets."""
    ensure_initialized(ctx)

    async with WorkoutService() as service:
        plan = await service.get_plan(session_id)
    _print_plan(plan)


@workout.command("log")
@click.argument("session_id", type=int)
@click.argument("exercise")
@click.option("-w", "--weight", type=float, help="Weight lifted (default: target)")
@click.option("-r", "--reps", type=int, help="Reps performed (default: target)")
@click.pass_context
@handle_errors
@async_command
async def log(ctx: click.Context, session_id: int, exercise: str, weight, reps):
    """Log a set for EXERCISE (ID or name).

    Omitted --weight or --reps default to the prescription.
    """
    ensure_initialized(ctx)

    async with WorkoutService() as service:
        target = await resolve_exercise(service, exercise)
        result = await service.log_set(session_id, target.id, weight, reps)

    _print_set_result(result)


@workout.command("edit-set")
@click.argument("set_id", type=int)
@click.option("-w", "--weight", type=float, required=True)
@click.option("-r", "--reps", type=int, required=True)
@click.pass_context
@handle_errors
@async_command
async def edit_set(ctx: click.Context, set_id: int, weight: float, reps: int):
    """Correct a logged set."""
    ensure_initialized(ctx)

    async with WorkoutService() as service:
        result = await service.edit_set(set_id, weight, reps)
    _print_set_result(result)


@workout.command("finish")
@click.argument("session_id", type=int)
@click.pass_context
@handle_errors
@async_command
async def finish(ctx: click.Context, session_id: int):
    """Finish a workout and advance to the next day."""
    ensure_initialized(ctx)

    async with WorkoutService() as service:
        position = await service.finish_workout(session_id)
        count = await service.weekly_workout_count()

    echo_success("Workout completed! Great job!")
    click.echo(f"Next workout: {position.get_position_display()}")
    click.echo(f"This week: {count}/3 workouts")


@workout.command("reopen")
@click.argument("session_id", type=int)
@click.pass_context
@handle_errors
@async_command
async def reopen(ctx: click.Context, session_id: int):
    """Reopen a past workout for corrections."""
    ensure_initialized(ctx)

    async with WorkoutService() as service:
        plan = await service.reopen_workout(session_id)

    echo_info("Editing a completed workout; the current position is unchanged.")
    _print_plan(plan)


@workout.command("history")
@click.option("--all", "show_all", is_flag=True, help="Show every workout")
@click.pass_context
@async_command
async def history(ctx: click.Context, show_all: bool):
    """List recent workouts."""
    ensure_initialized(ctx)

    async with WorkoutService() as service:
        sessions = await service.history(None if show_all else 5)

    if not sessions:
        echo_info("No workouts yet.")
        return

    rows = [
        [
            str(s.id),
            s.workout_date.isoformat(),
            f"Week {s.week} • {s.day_type.value} Day",
            str(s.cycle_number),
            s.get_summary(),
        ]
        for s in sessions
    ]
    click.echo(format_table(["ID", "Date", "Position", "Cycle", "Sets"], rows))


@workout.command("delete")
@click.argument("session_id", type=int)
@click.pass_context
@handle_errors
@async_command
async def delete(ctx: click.Context, session_id: int):
    """Delete a workout and all its sets."""
    ensure_initialized(ctx)

    async with WorkoutService() as service:
        token = await service.request_delete_workout(session_id)
        if not click.confirm(token.prompt):
            await service.confirmations.cancel(token.token)
            return
        await service.confirm_delete(token.token)

    echo_success("Workout deleted successfully")


@workout.command("delete-set")
@click.argument("set_id", type=int)
@click.pass_context
@handle_errors
@async_command
async def delete_set(ctx: click.Context, set_id: int):
    """Delete a single logged set."""
    ensure_initialized(ctx)

    async with WorkoutService() as service:
        token = await service.request_delete_set(set_id)
        if not click.confirm(token.prompt):
            await service.confirmations.cancel(token.token)
            return
        await service.confirm_delete(token.token)

    echo_success(f"Set {set_id} deleted")


def _print_plan(plan: WorkoutPlan) -> None:
    session = plan.session
    click.echo()
    click.echo(click.style(session.position.get_position_display(), bold=True))
    click.echo(f"Date: {session.workout_date.isoformat()}")
    click.echo("=" * 50)

    current = None
    for slot in plan.sets:
        if slot.exercise_name != current:
            current = slot.exercise_name
            marker = ""
            if slot.exercise_id in plan.leveled_exercise_ids:
                marker = click.style("  [leveled up]", fg="green")
            elif slot.exercise_id in plan.eligible_exercise_ids:
                marker = click.style("  [level up!]", fg="yellow")
            click.echo()
            click.echo(click.style(f"{current}", bold=True) + marker)
            click.echo(
                f"  Target: {format_weight(slot.prescribed_weight)} × {slot.prescribed_reps} reps"
            )

        if slot.logged:
            s = slot.logged
            color = {"Incomplete": "red", "Complete": "green", "Exceeded": "cyan"}[s.outcome.value]
            click.echo(
                f"  [{s.id}] Set {s.set_number}: {format_weight(s.actual_weight)} × "
                f"{s.actual_reps} " + click.style(s.outcome.value, fg=color)
            )
        else:
            click.echo(f"      Set {slot.set_number}: -")


def _print_set_result(result: SetResult) -> None:
    s = result.logged_set
    echo_success(f"{s.exercise_name}: {s.get_display()}")
    if result.level_up:
        lu = result.level_up
        click.echo(
            click.style("Level up! ", fg="green", bold=True)
            + f"{s.exercise_name} baseline {format_weight(lu.previous_weight)} -> "
            f"{format_weight(lu.new_weight)}"
        )
