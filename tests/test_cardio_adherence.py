"""Tests for cardio adherence indicators."""

from datetime import date, datetime, timedelta

from wave_lift.engine.cardio_adherence import (
    cardio_adherence,
    missed_interval_weeks,
    next_interval_due,
    rolling_aerobic_minutes,
    weekday_on_or_after,
    weekday_on_or_before,
    weekly_workout_count,
)
from wave_lift.models.cardio import CardioSession

SUNDAY = date(2026, 10, 18)


def cardio(day, minutes=30.0, interval=False):
    return CardioSession(
        workout_date=day,
        activity_type="Running" if interval else "Cycling",
        duration_minutes=minutes,
        is_interval_session=interval,
    )


class TestReferenceWeekday:
    """Tests for Sunday anchoring helpers."""

    def test_fixture_is_sunday(self):
        assert SUNDAY.weekday() == 6

    def test_on_or_after(self):
        assert weekday_on_or_after(SUNDAY) == SUNDAY
        assert weekday_on_or_after(SUNDAY + timedelta(days=1)) == SUNDAY + timedelta(days=7)
        assert weekday_on_or_after(SUNDAY - timedelta(days=1)) == SUNDAY

    def test_on_or_before(self):
        assert weekday_on_or_before(SUNDAY) == SUNDAY
        assert weekday_on_or_before(SUNDAY + timedelta(days=6)) == SUNDAY
        assert weekday_on_or_before(SUNDAY - timedelta(days=1)) == SUNDAY - timedelta(days=7)


class TestRollingAerobicMinutes:
    """Tests for the Zone 2 total."""

    def test_interval_sessions_excluded(self):
        now = SUNDAY
        history = [
            cardio(now - timedelta(days=3), 30),
            cardio(now - timedelta(days=1), 40, interval=True),
        ]
        assert rolling_aerobic_minutes(now, history) == 30

    def test_window_is_inclusive_seven_days(self):
        now = SUNDAY
        history = [
            cardio(now, 10),
            cardio(now - timedelta(days=7), 20),
            cardio(now - timedelta(days=8), 40),
        ]
        assert rolling_aerobic_minutes(now, history) == 30

    def test_future_sessions_ignored(self):
        history = [cardio(SUNDAY + timedelta(days=1), 60)]
        assert rolling_aerobic_minutes(SUNDAY, history) == 0

    def test_accepts_datetime_now(self):
        history = [cardio(SUNDAY, 45)]
        assert rolling_aerobic_minutes(datetime(2026, 10, 18, 20, 30), history) == 45

    def test_empty_history(self):
        assert rolling_aerobic_minutes(SUNDAY, []) == 0


class TestNextIntervalDue:
    """Tests for the 4x4 due date."""

    def test_no_history_is_next_sunday(self):
        assert next_interval_due(SUNDAY, []) == SUNDAY
        monday = SUNDAY + timedelta(days=1)
        assert next_interval_due(monday, []) == SUNDAY + timedelta(days=7)

    def test_anchored_to_last_session(self):
        now = SUNDAY
        last = now - timedelta(days=10)  # Thursday
        due = next_interval_due(now, [cardio(last, 35, interval=True)])
        assert due == weekday_on_or_after(last) + timedelta(days=7)
        assert due == SUNDAY
        assert due != now + timedelta(days=7)

    def test_long_gap_keeps_old_due_date(self):
        last = date(2026, 9, 1)
        due = next_interval_due(SUNDAY, [cardio(last, interval=True)])
        assert due == date(2026, 9, 13)

    def test_uses_most_recent_session(self):
        history = [
            cardio(date(2026, 10, 14), interval=True),
            cardio(date(2026, 9, 30), interval=True),
        ]
        assert next_interval_due(SUNDAY, history) == date(2026, 10, 25)

    def test_session_on_sunday(self):
        history = [cardio(SUNDAY, interval=True)]
        assert next_interval_due(SUNDAY, history) == SUNDAY + timedelta(days=7)

    def test_non_interval_sessions_ignored(self):
        history = [cardio(SUNDAY - timedelta(days=2), 60)]
        assert next_interval_due(SUNDAY, history) == SUNDAY

    def test_future_session_ignored(self):
        history = [cardio(SUNDAY + timedelta(days=3), interval=True)]
        assert next_interval_due(SUNDAY, history) == SUNDAY


class TestMissedIntervalWeeks:
    """Tests for the 12-week missed count."""

    def test_no_sessions_misses_all(self):
        assert missed_interval_weeks(SUNDAY, []) == 12

    def test_every_week_done(self):
        history = [cardio(SUNDAY - timedelta(weeks=k), interval=True) for k in range(12)]
        assert missed_interval_weeks(SUNDAY, history) == 0

    def test_current_week_counts(self):
        wednesday = SUNDAY + timedelta(days=3)
        history = [cardio(SUNDAY + timedelta(days=1), interval=True)]
        assert missed_interval_weeks(wednesday, history) == 11

    def test_two_sessions_same_week_count_once(self):
        history = [
            cardio(SUNDAY - timedelta(days=6), interval=True),
            cardio(SUNDAY - timedelta(days=2), interval=True),
        ]
        assert missed_interval_weeks(SUNDAY, history) == 11

    def test_older_than_window_ignored(self):
        window_start = SUNDAY - timedelta(weeks=11)
        history = [
            cardio(window_start - timedelta(days=1), interval=True),
            cardio(window_start, interval=True),
        ]
        assert missed_interval_weeks(SUNDAY, history) == 11

    def test_never_negative(self):
        history = [cardio(SUNDAY - timedelta(days=d), interval=True) for d in range(0, 84)]
        assert missed_interval_weeks(SUNDAY, history) == 0


class TestCardioAdherence:
    """Tests for the combined indicators."""

    def test_combined(self):
        history = [
            cardio(SUNDAY - timedelta(days=1), 100),
            cardio(SUNDAY - timedelta(days=4), 60),
            cardio(SUNDAY - timedelta(days=5), 35, interval=True),
        ]
        adherence = cardio_adherence(SUNDAY, history)
        assert adherence.aerobic_minutes == 160
        assert adherence.aerobic_target_met
        assert adherence.aerobic_minutes_remaining == 0
        assert adherence.next_interval_due == SUNDAY + timedelta(days=7)
        assert adherence.missed_interval_count == 11
        assert not adherence.is_interval_overdue(SUNDAY)

    def test_overdue_and_remaining(self):
        history = [
            cardio(date(2026, 9, 1), 35, interval=True),
            cardio(SUNDAY - timedelta(days=2), 45),
        ]
        adherence = cardio_adherence(SUNDAY, history)
        assert adherence.aerobic_minutes_remaining == 105
        assert not adherence.aerobic_target_met
        assert adherence.is_interval_overdue(SUNDAY)

    def test_accepts_generator(self):
        adherence = cardio_adherence(SUNDAY, (s for s in [cardio(SUNDAY, 20)]))
        assert adherence.aerobic_minutes == 20
        assert adherence.missed_interval_count == 12

    def test_to_dict(self):
        data = cardio_adherence(SUNDAY, []).to_dict()
        assert data["next_interval_due"] == "2026-10-18"
        assert data["aerobic_target_minutes"] == 150


class TestWeeklyWorkoutCount:
    """Tests for the strength workouts-per-week indicator."""

    def test_counts_current_week_only(self):
        wednesday = SUNDAY + timedelta(days=3)
        dates = [
            SUNDAY,
            SUNDAY + timedelta(days=2),
            SUNDAY - timedelta(days=1),
            SUNDAY + timedelta(days=4),
        ]
        assert weekly_workout_count(wednesday, dates) == 2

    def test_empty(self):
        assert weekly_workout_count(SUNDAY, []) == 0
