"""Database layer for wave-lift."""

from .engine import get_db_path, init_db, seed_exercises
from .repositories import (
    CardioRepository,
    ExerciseRepository,
    ProgressRepository,
    WeightRepository,
    WorkoutRepository,
)

__all__ = [
    "CardioRepository",
    "ExerciseRepository",
    "get_db_path",
    "init_db",
    "ProgressRepository",
    "seed_exercises",
    "WeightRepository",
    "WorkoutRepository",
]
