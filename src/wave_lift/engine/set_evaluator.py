"""Classify a logged set against its prescription."""

from ..models.workout import Outcome


def evaluate(
    actual_weight: float,
    actual_reps: float,
    target_weight: float,
    target_reps: float,
) -> Outcome:
    """Classify one attempt.

    Falling short on either axis is Incomplete. Meeting both exactly is
    Complete; Exceeded needs both met and at least one strictly beaten.
    """
    if actual_reps < target_reps or actual_weight < target_weight:
        return Outcome.INCOMPLETE
    if actual_reps > target_reps or actual_weight > target_weight:
        return Outcome.EXCEEDED
    return Outcome.COMPLETE


def evaluate_pair(
    actual: tuple[float, float], target: tuple[float, float]
) -> Outcome:
    """Classify ``(weight, reps)`` pairs."""
    actual_weight, actual_reps = actual
    target_weight, target_reps = target
    return evaluate(actual_weight, actual_reps, target_weight, target_reps)
