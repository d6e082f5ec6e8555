"""Data access layer for wave-lift."""

import json
import logging
from datetime import date, datetime
from pathlib import Path

import aiosqlite

from ..engine.progression import LevelUp
from ..models.cardio import CardioSession
from ..models.cycle import CyclePosition, DayType, ProgressRecord
from ..models.exercises import Exercise
from ..models.workout import LoggedSet, Outcome, WorkoutSession
from .engine import get_db_path

logger = logging.getLogger(__name__)


def _parse_timestamp(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


class ExerciseRepository:
    """Repository for the exercise library."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def add(self, exercise: Exercise) -> int:
        """Add a new exercise."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "INSERT INTO exercises (name, aliases) VALUES (?, ?)",
                (exercise.name, json.dumps(exercise.aliases)),
            )
            await db.commit()
            return cursor.lastrowid

    async def get(self, exercise_id: int) -> Exercise | None:
        """Get an exercise by ID."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM exercises WHERE id = ?", (exercise_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_exercise(row)

    async def find(self, query: str) -> Exercise | None:
        """Find an exercise by name or alias (case insensitive)."""
        for exercise in await self.list_all():
            if exercise.matches(query):
                return exercise
        return None

    async def list_all(self) -> list[Exercise]:
        """List all exercises."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute("SELECT * FROM exercises ORDER BY name")
            rows = await cursor.fetchall()
            return [self._row_to_exercise(row) for row in rows]

    def _row_to_exercise(self, row: aiosqlite.Row) -> Exercise:
        """Convert a database row to an Exercise."""
        return Exercise(
            id=row["id"],
            name=row["name"],
            aliases=json.loads(row["aliases"]) if row["aliases"] else [],
        )


class WeightRepository:
    """Repository for per-exercise baseline weights."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def get(self, exercise_id: int) -> float | None:
        """Get the baseline weight for an exercise."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT weight FROM user_weights WHERE exercise_id = ?", (exercise_id,)
            )
            row = await cursor.fetchone()
            return row[0] if row else None

    async def get_all(self) -> dict[int, float]:
        """Get all baseline weights keyed by exercise ID."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute("SELECT exercise_id, weight FROM user_weights")
            rows = await cursor.fetchall()
            return {row[0]: row[1] for row in rows}

    async def upsert_many(self, weights: dict[int, float]) -> None:
        """Create or update several baseline weights in one transaction."""
        if not weights:
            return
        async with aiosqlite.connect(self.db_path) as db:
            await db.executemany(
                """
                INSERT INTO user_weights (exercise_id, weight, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(exercise_id) DO UPDATE SET
                    weight = excluded.weight,
                    updated_at = CURRENT_TIMESTAMP
                """,
                list(weights.items()),
            )
            await db.commit()

    async def upsert(self, exercise_id: int, weight: float) -> None:
        """Create or update one baseline weight."""
        await self.upsert_many({exercise_id: weight})


class ProgressRepository:
    """Repository for the single current-progress record."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def get(self) -> ProgressRecord | None:
        """Get the current progress record, if onboarding has happened."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute("SELECT * FROM user_progress WHERE id = 1")
            row = await cursor.fetchone()
            if row is None:
                return None
            return ProgressRecord(
                id=row["id"],
                position=CyclePosition(
                    week=row["current_week"],
                    day_type=DayType(row["current_day"]),
                    cycle_number=row["current_cycle"],
                ),
                updated_at=_parse_timestamp(row["updated_at"]),
            )

    async def upsert(self, position: CyclePosition) -> None:
        """Create or replace the current position."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO user_progress (id, current_week, current_day, current_cycle, updated_at)
                VALUES (1, ?, ?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(id) DO UPDATE SET
                    current_week = excluded.current_week,
                    current_day = excluded.current_day,
                    current_cycle = excluded.current_cycle,
                    updated_at = CURRENT_TIMESTAMP
                """,
                (position.week, position.day_type.value, position.cycle_number),
            )
            await db.commit()


class WorkoutRepository:
    """Repository for workout sessions and their logged sets."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, session: WorkoutSession) -> int:
        """Create a new workout session."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO workout_sessions
                (week_number, day_type, cycle_number, workout_date, finished_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    session.week,
                    session.day_type.value,
                    session.cycle_number,
                    session.workout_date.isoformat(),
                    session.finished_at.isoformat() if session.finished_at else None,
                ),
            )
            await db.commit()
            return cursor.lastrowid

    async def get(self, session_id: int) -> WorkoutSession | None:
        """Get a session by ID, with its sets."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM workout_sessions WHERE id = ?", (session_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            session = self._row_to_session(row)
            session.sets = await self._fetch_sets(db, session_id)
            return session

    async def list_recent(self, limit: int | None = 5) -> list[WorkoutSession]:
        """List sessions, most recent first, with their sets."""
        query = "SELECT * FROM workout_sessions ORDER BY workout_date DESC, id DESC"
        params: tuple = ()
        if limit is not None:
            query += " LIMIT ?"
            params = (limit,)

        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(query, params)
            rows = await cursor.fetchall()
            sessions = []
            for row in rows:
                session = self._row_to_session(row)
                session.sets = await self._fetch_sets(db, session.id)
                sessions.append(session)
            return sessions

    async def dates_since(self, since: date) -> list[date]:
        """Workout dates on or after ``since``."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT workout_date FROM workout_sessions WHERE workout_date >= ?",
                (since.isoformat(),),
            )
            rows = await cursor.fetchall()
            return [date.fromisoformat(row[0]) for row in rows]

    async def mark_finished(self, session_id: int, finished_at: datetime) -> None:
        """Record when a session was finished."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                "UPDATE workout_sessions SET finished_at = ? WHERE id = ?",
                (finished_at.isoformat(), session_id),
            )
            await db.commit()

    async def delete(self, session_id: int) -> None:
        """Delete a session together with its sets and level-up records."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute("DELETE FROM workout_sets WHERE session_id = ?", (session_id,))
            await db.execute("DELETE FROM level_ups WHERE session_id = ?", (session_id,))
            await db.execute("DELETE FROM workout_sessions WHERE id = ?", (session_id,))
            await db.commit()
        logger.info("Deleted workout session %s", session_id)

    async def add_set(self, logged_set: LoggedSet) -> int:
        """Insert a logged set."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO workout_sets
                (session_id, exercise_id, set_number, prescribed_weight, prescribed_reps,
                 actual_weight, actual_reps, status)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    logged_set.session_id,
                    logged_set.exercise_id,
                    logged_set.set_number,
                    logged_set.prescribed_weight,
                    logged_set.prescribed_reps,
                    logged_set.actual_weight,
                    logged_set.actual_reps,
                    logged_set.outcome.value,
                ),
            )
            await db.commit()
            return cursor.lastrowid

    async def get_set(self, set_id: int) -> LoggedSet | None:
        """Get a logged set by ID."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT workout_sets.*, exercises.name AS exercise_name
                FROM workout_sets
                LEFT JOIN exercises ON exercises.id = workout_sets.exercise_id
                WHERE workout_sets.id = ?
                """,
                (set_id,),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_set(row)

    async def update_set(self, logged_set: LoggedSet) -> None:
        """Rewrite the actual values and outcome of a logged set."""
        if logged_set.id is None:
            raise ValueError("Set must have an ID to update")

        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                UPDATE workout_sets SET
                    actual_weight = ?, actual_reps = ?, status = ?
                WHERE id = ?
                """,
                (
                    logged_set.actual_weight,
                    logged_set.actual_reps,
                    logged_set.outcome.value,
                    logged_set.id,
                ),
            )
            await db.commit()

    async def delete_set(self, set_id: int) -> None:
        """Delete a logged set."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute("DELETE FROM workout_sets WHERE id = ?", (set_id,))
            await db.commit()
        logger.info("Deleted set %s", set_id)

    async def record_level_up(self, session_id: int, level_up: LevelUp) -> bool:
        """Record a progression; False if one already exists for the pair."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT OR IGNORE INTO level_ups
                (session_id, exercise_id, previous_weight, new_weight)
                VALUES (?, ?, ?, ?)
                """,
                (
                    session_id,
                    level_up.exercise_id,
                    level_up.previous_weight,
                    level_up.new_weight,
                ),
            )
            await db.commit()
            return cursor.rowcount == 1

    async def leveled_exercises(self, session_id: int) -> set[int]:
        """Exercise IDs that already progressed in a session."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT exercise_id FROM level_ups WHERE session_id = ?", (session_id,)
            )
            rows = await cursor.fetchall()
            return {row[0] for row in rows}

    async def _fetch_sets(self, db: aiosqlite.Connection, session_id: int) -> list[LoggedSet]:
        cursor = await db.execute(
            """
            SELECT workout_sets.*, exercises.name AS exercise_name
            FROM workout_sets
            LEFT JOIN exercises ON exercises.id = workout_sets.exercise_id
            WHERE workout_sets.session_id = ?
            ORDER BY exercises.name, workout_sets.set_number
            """,
            (session_id,),
        )
        rows = await cursor.fetchall()
        return [self._row_to_set(row) for row in rows]

    def _row_to_session(self, row: aiosqlite.Row) -> WorkoutSession:
        """Convert a database row to a WorkoutSession (without sets)."""
        return WorkoutSession(
            id=row["id"],
            week=row["week_number"],
            day_type=DayType(row["day_type"]),
            cycle_number=row["cycle_number"],
            workout_date=date.fromisoformat(row["workout_date"]),
            finished_at=_parse_timestamp(row["finished_at"]),
        )

    def _row_to_set(self, row: aiosqlite.Row) -> LoggedSet:
        """Convert a database row to a LoggedSet."""
        return LoggedSet(
            id=row["id"],
            session_id=row["session_id"],
            exercise_id=row["exercise_id"],
            exercise_name=row["exercise_name"] or "",
            set_number=row["set_number"],
            prescribed_weight=row["prescribed_weight"],
            prescribed_reps=row["prescribed_reps"],
            actual_weight=row["actual_weight"],
            actual_reps=row["actual_reps"],
            outcome=Outcome(row["status"]),
        )


class CardioRepository:
    """Repository for cardio sessions."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, session: CardioSession) -> int:
        """Store a cardio session."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO cardio_sessions
                (activity_type, duration_minutes, is_interval, workout_date)
                VALUES (?, ?, ?, ?)
                """,
                (
                    session.activity_type,
                    session.duration_minutes,
                    int(session.is_interval_session),
                    session.workout_date.isoformat(),
                ),
            )
            await db.commit()
            return cursor.lastrowid

    async def get(self, session_id: int) -> CardioSession | None:
        """Get a cardio session by ID."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM cardio_sessions WHERE id = ?", (session_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_session(row)

    async def list_recent(self, limit: int = 5) -> list[CardioSession]:
        """Most recent sessions first."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM cardio_sessions ORDER BY workout_date DESC, id DESC LIMIT ?",
                (limit,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_session(row) for row in rows]

    async def list_since(self, since: date) -> list[CardioSession]:
        """Sessions dated on or after ``since``, oldest first."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM cardio_sessions WHERE workout_date >= ? ORDER BY workout_date, id",
                (since.isoformat(),),
            )
            rows = await cursor.fetchall()
            return [self._row_to_session(row) for row in rows]

    async def last_interval_session(self, on_or_before: date) -> CardioSession | None:
        """Most recent 4x4 session up to a day, however old."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT * FROM cardio_sessions
                WHERE is_interval = 1 AND workout_date <= ?
                ORDER BY workout_date DESC, id DESC LIMIT 1
                """,
                (on_or_before.isoformat(),),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_session(row)

    async def delete(self, session_id: int) -> None:
        """Delete a cardio session."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute("DELETE FROM cardio_sessions WHERE id = ?", (session_id,))
            await db.commit()

    def _row_to_session(self, row: aiosqlite.Row) -> CardioSession:
        """Convert a database row to a CardioSession."""
        return CardioSession(
            id=row["id"],
            workout_date=date.fromisoformat(row["workout_date"]),
            activity_type=row["activity_type"],
            duration_minutes=row["duration_minutes"],
            is_interval_session=bool(row["is_interval"]),
        )
