"""Training rules engine.

Pure functions over cycle positions, logged outcomes and cardio history.
Nothing in this package reads or writes storage.
"""

from .cardio_adherence import cardio_adherence, weekly_workout_count
from .cycle_clock import (
    advance,
    reps_for_week,
    round_to_increment,
    target_weight,
    targets_for,
    weight_multiplier,
)
from .errors import InvalidState
from .progression import (
    LevelUp,
    ProgressionEngine,
    check_level_up,
    is_level_up_eligible,
    is_level_up_window,
)
from .set_evaluator import evaluate, evaluate_pair

__all__ = [
    "InvalidState",
    "LevelUp",
    "ProgressionEngine",
    "advance",
    "cardio_adherence",
    "check_level_up",
    "evaluate",
    "evaluate_pair",
    "is_level_up_eligible",
    "is_level_up_window",
    "reps_for_week",
    "round_to_increment",
    "target_weight",
    "targets_for",
    "weekly_workout_count",
    "weight_multiplier",
]
