"""Cardio adherence indicators.

Two targets are tracked from the cardio history:

* Zone 2: a trailing 7-day total of non-interval minutes, aiming for 150.
* Norwegian 4x4: one interval session per week. Weeks run from Sunday, the
  reference weekday, and the next due date follows the last completed
  session rather than today, so a long gap does not skip ahead.

Everything here is a pure function of ``(now, history)``; results can be
recomputed on every read. Sessions dated after ``now`` are ignored.
"""

from collections.abc import Iterable
from datetime import date, datetime, timedelta

from ..models.cardio import CardioAdherence, CardioSession

REFERENCE_WEEKDAY = 6  # Sunday, per date.weekday()
ROLLING_WINDOW_DAYS = 7
MISSED_WINDOW_WEEKS = 12
AEROBIC_TARGET_MINUTES = 150
WEEKLY_WORKOUT_TARGET = 3


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def weekday_on_or_after(day: date, weekday: int = REFERENCE_WEEKDAY) -> date:
    """First ``weekday`` falling on or after ``day``."""
    return day + timedelta(days=(weekday - day.weekday()) % 7)


def weekday_on_or_before(day: date, weekday: int = REFERENCE_WEEKDAY) -> date:
    """Last ``weekday`` falling on or before ``day``."""
    return day - timedelta(days=(day.weekday() - weekday) % 7)


def _interval_dates(now: date, history: Iterable[CardioSession]) -> list[date]:
    return sorted(
        _as_date(s.workout_date)
        for s in history
        if s.is_interval_session and _as_date(s.workout_date) <= now
    )


def rolling_aerobic_minutes(now: date | datetime, history: Iterable[CardioSession]) -> float:
    """Non-interval minutes dated within ``[now - 7 days, now]``."""
    today = _as_date(now)
    window_start = today - timedelta(days=ROLLING_WINDOW_DAYS)
    return sum(
        s.duration_minutes
        for s in history
        if not s.is_interval_session and window_start <= _as_date(s.workout_date) <= today
    )


def next_interval_due(now: date | datetime, history: Iterable[CardioSession]) -> date:
    """Due date of the next 4x4 session.

    With no interval session on record it is the next Sunday (today, if
    today is Sunday). Otherwise it is one week after the Sunday on or after
    the last session.
    """
    today = _as_date(now)
    done = _interval_dates(today, history)
    if not done:
        return weekday_on_or_after(today)
    return weekday_on_or_after(done[-1]) + timedelta(days=7)


def missed_interval_weeks(now: date | datetime, history: Iterable[CardioSession]) -> int:
    """Weeks without a 4x4 session among the last 12 Sunday-started weeks.

    The current week is the last of the twelve buckets.
    """
    today = _as_date(now)
    window_start = weekday_on_or_before(today) - timedelta(weeks=MISSED_WINDOW_WEEKS - 1)
    weeks_done = {
        (d - window_start).days // 7
        for d in _interval_dates(today, history)
        if d >= window_start
    }
    return max(0, MISSED_WINDOW_WEEKS - len(weeks_done))


def cardio_adherence(
    now: date | datetime, history: Iterable[CardioSession]
) -> CardioAdherence:
    """All three indicators for ``now``."""
    sessions = list(history)
    return CardioAdherence(
        aerobic_minutes=rolling_aerobic_minutes(now, sessions),
        next_interval_due=next_interval_due(now, sessions),
        missed_interval_count=missed_interval_weeks(now, sessions),
        aerobic_target_minutes=AEROBIC_TARGET_MINUTES,
    )


def weekly_workout_count(now: date | datetime, workout_dates: Iterable[date | datetime]) -> int:
    """Strength workouts in the calendar week (Sunday start) containing ``now``."""
    today = _as_date(now)
    week_start = weekday_on_or_before(today)
    return sum(1 for d in workout_dates if week_start <= _as_date(d) <= today)
