"""Application services for wave-lift."""

from .cardio import CardioService
from .confirmations import ConfirmationAction, ConfirmationRegistry, ConfirmationToken
from .errors import ConfirmationError, NotFoundError
from .weight_writer import WeightWriter
from .workout import SetResult, WorkoutPlan, WorkoutService

__all__ = [
    "CardioService",
    "ConfirmationAction",
    "ConfirmationError",
    "ConfirmationRegistry",
    "ConfirmationToken",
    "NotFoundError",
    "SetResult",
    "WeightWriter",
    "WorkoutPlan",
    "WorkoutService",
]
