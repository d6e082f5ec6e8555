"""Database engine setup and initialization."""

import json
import logging
from pathlib import Path

import aiosqlite

from ..config import Settings

logger = logging.getLogger(__name__)


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    if data_dir is None:
        data_dir = Settings.from_env().data_dir
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / "wave_lift.db"


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        # Exercise library
        await db.execute("""
            CREATE TABLE IF NOT EXISTS exercises (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT UNIQUE NOT NULL,
                aliases TEXT DEFAULT '[]'
            )
        """)

        # Per-exercise baseline (prescribed) weight
        await db.execute("""
            CREATE TABLE IF NOT EXISTS user_weights (
                exercise_id INTEGER PRIMARY KEY,
                weight REAL NOT NULL DEFAULT 0,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (exercise_id) REFERENCES exercises(id) ON DELETE CASCADE
            )
        """)

        # Current cycle position (single row)
        await db.execute("""
            CREATE TABLE IF NOT EXISTS user_progress (
                id INTEGER PRIMARY KEY CHECK (id = 1),
                current_week INTEGER NOT NULL DEFAULT 1,
                current_day TEXT NOT NULL DEFAULT 'Heavy',
                current_cycle INTEGER NOT NULL DEFAULT 1,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # Strength workout sessions
        await db.execute("""
            CREATE TABLE IF NOT EXISTS workout_sessions (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                week_number INTEGER NOT NULL,
                day_type TEXT NOT NULL,
                cycle_number INTEGER NOT NULL,
                workout_date DATE NOT NULL,
                finished_at TIMESTAMP,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # Logged working sets
        await db.execute("""
            CREATE TABLE IF NOT EXISTS workout_sets (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                session_id INTEGER NOT NULL,
                exercise_id INTEGER NOT NULL,
                set_number INTEGER NOT NULL,
                prescribed_weight REAL NOT NULL,
                prescribed_reps INTEGER NOT NULL,
                actual_weight REAL NOT NULL,
                actual_reps INTEGER NOT NULL,
                status TEXT NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (session_id) REFERENCES workout_sessions(id) ON DELETE CASCADE,
                FOREIGN KEY (exercise_id) REFERENCES exercises(id)
            )
        """)

        # Fired progressions; the unique key makes level-up at-most-once per
        # (session, exercise) across processes
        await db.execute("""
            CREATE TABLE IF NOT EXISTS level_ups (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                session_id INTEGER NOT NULL,
                exercise_id INTEGER NOT NULL,
                previous_weight REAL NOT NULL,
                new_weight REAL NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                UNIQUE (session_id, exercise_id),
                FOREIGN KEY (session_id) REFERENCES workout_sessions(id) ON DELETE CASCADE
            )
        """)

        # Cardio sessions
        await db.execute("""
            CREATE TABLE IF NOT EXISTS cardio_sessions (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                activity_type TEXT NOT NULL,
                duration_minutes REAL NOT NULL,
                is_interval INTEGER NOT NULL DEFAULT 0,
                workout_date DATE NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # Create indexes for common queries
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_workout_sets_session
            ON workout_sets(session_id)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_workout_sessions_date
            ON workout_sessions(workout_date)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_cardio_sessions_date
            ON cardio_sessions(workout_date)
        """)

        await db.commit()

    logger.info("Database schema ready at %s", db_path)


async def seed_exercises(db_path: Path | None = None) -> int:
    """Seed the database with the default exercise library."""
    from ..models.exercises import COMMON_EXERCISES

    if db_path is None:
        db_path = get_db_path()

    added = 0
    async with aiosqlite.connect(db_path) as db:
        for exercise in COMMON_EXERCISES:
            cursor = await db.execute(
                "INSERT OR IGNORE INTO exercises (name, aliases) VALUES (?, ?)",
                (exercise.name, json.dumps(exercise.aliases)),
            )
            added += cursor.rowcount

        await db.commit()

    logger.info("Seeded %d exercises", added)
    return added
