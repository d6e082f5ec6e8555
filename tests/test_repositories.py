"""Tests for the SQLite repositories."""

import asyncio
from datetime import date, datetime

import pytest

from wave_lift.db import (
    CardioRepository,
    ExerciseRepository,
    ProgressRepository,
    WeightRepository,
    WorkoutRepository,
    init_db,
    seed_exercises,
)
from wave_lift.engine.progression import LevelUp
from wave_lift.models.cardio import CardioSession
from wave_lift.models.cycle import CyclePosition, DayType
from wave_lift.models.exercises import COMMON_EXERCISES, Exercise
from wave_lift.models.workout import LoggedSet, Outcome, WorkoutSession


def _session(workout_date=date(2026, 10, 18), week=1, day_type=DayType.HEAVY):
    return WorkoutSession(week=week, day_type=day_type, cycle_number=1, workout_date=workout_date)


def _set(session_id, exercise_id, set_number, outcome=Outcome.COMPLETE):
    return LoggedSet(
        session_id=session_id,
        exercise_id=exercise_id,
        set_number=set_number,
        prescribed_weight=100,
        prescribed_reps=8,
        actual_weight=100,
        actual_reps=8,
        outcome=outcome,
    )


class TestSchema:
    def test_init_is_repeatable(self, temp_db_path):
        async def scenario():
            await init_db(temp_db_path)
            first = await seed_exercises(temp_db_path)
            await init_db(temp_db_path)
            second = await seed_exercises(temp_db_path)
            return first, second

        assert asyncio.run(scenario()) == (len(COMMON_EXERCISES), 0)


class TestExerciseRepository:
    def test_list_and_find(self, db_path):
        repo = ExerciseRepository(db_path)

        async def scenario():
            names = [e.name for e in await repo.list_all()]
            ohp = await repo.find("ohp")
            squat = await repo.find("  back   squat ")
            missing = await repo.find("Curl")
            return names, ohp, squat, missing

        names, ohp, squat, missing = asyncio.run(scenario())
        assert names == sorted(e.name for e in COMMON_EXERCISES)
        assert ohp.name == "Overhead Press"
        assert squat.name == "Squat"
        assert missing is None

    def test_add_and_get(self, db_path):
        repo = ExerciseRepository(db_path)

        async def scenario():
            exercise_id = await repo.add(Exercise(name="Front Squat", aliases=["FS"]))
            return await repo.get(exercise_id)

        exercise = asyncio.run(scenario())
        assert exercise.name == "Front Squat"
        assert exercise.aliases == ["FS"]


class TestWeightRepository:
    def test_upsert_overwrites(self, db_path):
        repo = WeightRepository(db_path)

        async def scenario():
            await repo.upsert(1, 100)
            await repo.upsert_many({1: 110, 2: 60})
            return await repo.get(1), await repo.get_all(), await repo.get(99)

        one, all_weights, missing = asyncio.run(scenario())
        assert one == 110
        assert all_weights == {1: 110, 2: 60}
        assert missing is None


class TestProgressRepository:
    def test_single_row(self, db_path):
        repo = ProgressRepository(db_path)

        async def scenario():
            before = await repo.get()
            await repo.upsert(CyclePosition(week=2, day_type=DayType.LIGHT, cycle_number=1))
            await repo.upsert(CyclePosition(week=3, day_type=DayType.MEDIUM, cycle_number=2))
            return before, await repo.get()

        before, record = asyncio.run(scenario())
        assert before is None
        assert record.id == 1
        assert record.position == CyclePosition(week=3, day_type=DayType.MEDIUM, cycle_number=2)
        assert record.updated_at is not None


class TestWorkoutRepository:
    def test_session_with_sets(self, db_path):
        repo = WorkoutRepository(db_path)

        async def scenario():
            session_id = await repo.create(_session())
            await repo.add_set(_set(session_id, 1, 1))
            await repo.add_set(_set(session_id, 1, 2, Outcome.INCOMPLETE))
            return await repo.get(session_id)

        session = asyncio.run(scenario())
        assert session.position == CyclePosition(week=1, day_type=DayType.HEAVY)
        assert [s.set_number for s in session.sets] == [1, 2]
        assert session.sets[1].outcome == Outcome.INCOMPLETE
        assert session.sets[0].exercise_name

    def test_update_and_delete_set(self, db_path):
        repo = WorkoutRepository(db_path)

        async def scenario():
            session_id = await repo.create(_session())
            set_id = await repo.add_set(_set(session_id, 1, 1))
            logged = await repo.get_set(set_id)
            logged.actual_reps = 10
            logged.outcome = Outcome.EXCEEDED
            await repo.update_set(logged)
            updated = await repo.get_set(set_id)
            await repo.delete_set(set_id)
            return updated, await repo.get_set(set_id)

        updated, deleted = asyncio.run(scenario())
        assert updated.actual_reps == 10
        assert updated.outcome == Outcome.EXCEEDED
        assert deleted is None

    def test_update_without_id_raises(self, db_path):
        repo = WorkoutRepository(db_path)
        with pytest.raises(ValueError):
            asyncio.run(repo.update_set(_set(1, 1, 1)))

    def test_level_up_recorded_once(self, db_path):
        repo = WorkoutRepository(db_path)
        level_up = LevelUp(exercise_id=1, previous_weight=100, new_weight=110)

        async def scenario():
            session_id = await repo.create(_session(week=5))
            first = await repo.record_level_up(session_id, level_up)
            second = await repo.record_level_up(session_id, level_up)
            return first, second, await repo.leveled_exercises(session_id)

        first, second, leveled = asyncio.run(scenario())
        assert first is True
        assert second is False
        assert leveled == {1}

    def test_history_and_delete(self, db_path):
        repo = WorkoutRepository(db_path)

        async def scenario():
            old = await repo.create(_session(date(2026, 10, 1)))
            new = await repo.create(_session(date(2026, 10, 15)))
            await repo.add_set(_set(new, 1, 1))
            await repo.mark_finished(new, datetime(2026, 10, 15, 19, 0))
            recent = await repo.list_recent(5)
            dates = await repo.dates_since(date(2026, 10, 11))
            await repo.delete(new)
            return old, new, recent, dates, await repo.get(new), await repo.list_recent(None)

        old, new, recent, dates, deleted, remaining = asyncio.run(scenario())
        assert [s.id for s in recent] == [new, old]
        assert recent[0].is_finished
        assert dates == [date(2026, 10, 15)]
        assert deleted is None
        assert [s.id for s in remaining] == [old]


class TestCardioRepository:
    def test_queries(self, db_path):
        repo = CardioRepository(db_path)

        def cardio(day, interval=False):
            return CardioSession(
                workout_date=day,
                activity_type="Running",
                duration_minutes=30,
                is_interval_session=interval,
            )

        async def scenario():
            await repo.create(cardio(date(2026, 5, 3), interval=True))
            await repo.create(cardio(date(2026, 10, 10)))
            latest = await repo.create(cardio(date(2026, 10, 17)))
            return (
                await repo.list_recent(2),
                await repo.list_since(date(2026, 10, 1)),
                await repo.last_interval_session(date(2026, 10, 18)),
                await repo.get(latest),
            )

        recent, since, last_interval, latest = asyncio.run(scenario())
        assert [s.workout_date for s in recent] == [date(2026, 10, 17), date(2026, 10, 10)]
        assert [s.workout_date for s in since] == [date(2026, 10, 10), date(2026, 10, 17)]
        assert last_interval.workout_date == date(2026, 5, 3)
        assert last_interval.is_interval_session
        assert latest.id is not None

    def test_delete(self, db_path):
        repo = CardioRepository(db_path)

        async def scenario():
            session = CardioSession(
                workout_date=date(2026, 10, 18), activity_type="Rowing", duration_minutes=20
            )
            session_id = await repo.create(session)
            await repo.delete(session_id)
            return await repo.get(session_id)

        assert asyncio.run(scenario()) is None
