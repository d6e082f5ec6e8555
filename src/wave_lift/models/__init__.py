"""Data models for wave-lift."""

from .cardio import CardioAdherence, CardioSession
from .cycle import CyclePosition, DayType, ExerciseTarget, ProgressRecord
from .exercises import Exercise
from .workout import LoggedSet, Outcome, PlannedSet, WorkoutSession

__all__ = [
    "CardioAdherence",
    "CardioSession",
    "CyclePosition",
    "DayType",
    "Exercise",
    "ExerciseTarget",
    "LoggedSet",
    "Outcome",
    "PlannedSet",
    "ProgressRecord",
    "WorkoutSession",
]
