"""Tests for data models."""

from datetime import date, datetime

from wave_lift.models.cardio import CardioAdherence, CardioSession
from wave_lift.models.cycle import CyclePosition, DayType
from wave_lift.models.exercises import COMMON_EXERCISES, Exercise
from wave_lift.models.workout import LoggedSet, Outcome, WorkoutSession


class TestCyclePosition:
    """Tests for CyclePosition model."""

    def test_defaults_to_cycle_start(self):
        position = CyclePosition()
        assert (position.week, position.day_type, position.cycle_number) == (1, DayType.HEAVY, 1)

    def test_roundtrip(self):
        position = CyclePosition(week=4, day_type=DayType.LIGHT, cycle_number=2)
        assert CyclePosition.from_dict(position.to_dict()) == position

    def test_position_display(self):
        position = CyclePosition(week=3, day_type=DayType.MEDIUM, cycle_number=2)
        assert position.get_position_display() == "Week 3 • Medium Day • Cycle 2"

    def test_hashable(self):
        assert len({CyclePosition(), CyclePosition()}) == 1


class TestExercise:
    """Tests for Exercise model."""

    def test_matches_name_and_alias(self):
        exercise = Exercise(name="Overhead Press", aliases=["OHP"])
        assert exercise.matches("overhead press")
        assert exercise.matches("ohp")
        assert not exercise.matches("press")

    def test_common_exercises_unique(self):
        names = [e.name for e in COMMON_EXERCISES]
        assert len(names) == len(set(names))

    def test_from_dict(self):
        exercise = Exercise.from_dict({"name": "Squat"}, id=4)
        assert exercise.id == 4
        assert exercise.aliases == []


class TestWorkoutSession:
    """Tests for WorkoutSession model."""

    def _set(self, exercise_id, set_number):
        return LoggedSet(
            session_id=1,
            exercise_id=exercise_id,
            set_number=set_number,
            prescribed_weight=85,
            prescribed_reps=6,
            actual_weight=85,
            actual_reps=6,
            outcome=Outcome.COMPLETE,
        )

    def test_position_and_sets_for(self):
        session = WorkoutSession(
            week=2,
            day_type=DayType.MEDIUM,
            cycle_number=1,
            workout_date=date(2026, 10, 18),
            sets=[self._set(1, 2), self._set(2, 1), self._set(1, 1)],
        )
        assert session.position == CyclePosition(week=2, day_type=DayType.MEDIUM)
        assert [s.set_number for s in session.sets_for(1)] == [1, 2]
        assert session.get_summary() == "3 sets completed"
        assert not session.is_finished

    def test_to_dict(self):
        session = WorkoutSession(
            week=1,
            day_type=DayType.HEAVY,
            cycle_number=1,
            workout_date=date(2026, 10, 18),
            finished_at=datetime(2026, 10, 18, 18, 30),
            id=5,
        )
        data = session.to_dict()
        assert data["day_type"] == "Heavy"
        assert data["workout_date"] == "2026-10-18"
        assert data["finished_at"] == "2026-10-18T18:30:00"

    def test_logged_set_roundtrip(self):
        logged = self._set(1, 1)
        restored = LoggedSet.from_dict(logged.to_dict(), id=9)
        assert restored.outcome == Outcome.COMPLETE
        assert restored.id == 9
        assert "Complete" in restored.get_display()


class TestCardioModels:
    """Tests for cardio models."""

    def test_session_from_dict(self):
        session = CardioSession.from_dict(
            {
                "workout_date": "2026-10-18",
                "activity_type": "Rowing",
                "duration_minutes": 32,
                "is_interval_session": 1,
            },
            id=2,
        )
        assert session.workout_date == date(2026, 10, 18)
        assert session.is_interval_session is True

    def test_adherence_properties(self):
        adherence = CardioAdherence(
            aerobic_minutes=120,
            next_interval_due=date(2026, 10, 18),
            missed_interval_count=3,
        )
        assert adherence.aerobic_minutes_remaining == 30
        assert not adherence.aerobic_target_met
        assert adherence.is_interval_overdue(date(2026, 10, 19))
        assert not adherence.is_interval_overdue(date(2026, 10, 18))
