"""Cardio commands."""

from datetime import date

import click

from ..questionnaire import CardioQuestionnaire
from ..services.cardio import CardioService
from .base import (
    async_command,
    echo_info,
    echo_success,
    echo_warning,
    ensure_initialized,
    format_table,
    handle_errors,
)


@click.group()
def cardio():
    """Log cardio and track Zone 2 and 4x4 targets."""
    pass


@cardio.command("log")
@click.argument("activity", required=False)
@click.argument("minutes", type=float, required=False)
@click.option("--interval", "is_interval", is_flag=True, help="Norwegian 4x4 session")
@click.option(
    "--date", "workout_date", type=click.DateTime(formats=["%Y-%m-%d"]), help="Defaults to today"
)
@click.pass_context
@handle_errors
@async_command
async def log(ctx: click.Context, activity, minutes, is_interval, workout_date):
    """Log a cardio session.

    Without ACTIVITY and MINUTES an interactive questionnaire is shown.

    Examples:

        wave-lift cardio log Cycling 45

        wave-lift cardio log Running 35 --interval
    """
    ensure_initialized(ctx)

    if activity is None or minutes is None:
        answers = await CardioQuestionnaire().collect()
        if answers is None:
            echo_info("Cancelled.")
            return
        activity = answers.activity_type
        minutes = answers.duration_minutes
        is_interval = answers.is_interval_session

    service = CardioService()
    session = await service.log_session(
        activity,
        minutes,
        is_interval_session=is_interval,
        workout_date=workout_date.date() if workout_date else None,
    )
    kind = " (4x4)" if session.is_interval_session else ""
    echo_success(f"Logged {session.duration_minutes:g} min of {session.activity_type}{kind}")

    _print_adherence(await service.adherence())


@cardio.command("list")
@click.option("-n", "--limit", default=5, show_default=True, help="Number of sessions")
@click.pass_context
@async_command
async def list_sessions(ctx: click.Context, limit: int):
    """List recent cardio sessions."""
    ensure_initialized(ctx)

    sessions = await CardioService().recent(limit)
    if not sessions:
        echo_info("No cardio logged yet.")
        return

    rows = [
        [
            str(s.id),
            s.workout_date.isoformat(),
            s.activity_type,
            f"{s.duration_minutes:g}",
            "4x4" if s.is_interval_session else "",
        ]
        for s in sessions
    ]
    click.echo(format_table(["ID", "Date", "Activity", "Minutes", ""], rows))


@cardio.command("status")
@click.pass_context
@async_command
async def status(ctx: click.Context):
    """Show Zone 2 minutes and 4x4 schedule."""
    ensure_initialized(ctx)
    _print_adherence(await CardioService().adherence())


@cardio.command("delete")
@click.argument("session_id", type=int)
@click.pass_context
@handle_errors
@async_command
async def delete(ctx: click.Context, session_id: int):
    """Delete a cardio session."""
    ensure_initialized(ctx)

    service = CardioService()
    token = await service.request_delete(session_id)
    if not click.confirm(token.prompt):
        await service.confirmations.cancel(token.token)
        return
    await service.confirm_delete(token.token)
    echo_success(f"Deleted cardio session {session_id}")


def _print_adherence(adherence) -> None:
    today = date.today()

    click.echo()
    click.echo(click.style("Norwegian 4x4", bold=True))
    click.echo(f"  Due: {adherence.next_interval_due.strftime('%a, %b %d, %Y')}")
    if adherence.is_interval_overdue(today):
        echo_warning("4x4 session is overdue")
    if adherence.missed_interval_count > 0:
        echo_warning(f"{adherence.missed_interval_count} missed in last 12 weeks")

    click.echo()
    click.echo(click.style("Zone 2 Training", bold=True))
    minutes = f"{adherence.aerobic_minutes:g}/{adherence.aerobic_target_minutes} min"
    if adherence.aerobic_target_met:
        click.echo(f"  {minutes} - last 7 days, target met!")
    else:
        click.echo(
            f"  {minutes} - last 7 days ({adherence.aerobic_minutes_remaining:g} min to go)"
        )
