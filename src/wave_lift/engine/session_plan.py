"""Prescribed set slots for a workout session."""

from collections.abc import Iterable, Mapping

from ..models.cycle import CyclePosition
from ..models.exercises import Exercise
from ..models.workout import LoggedSet, PlannedSet
from .cycle_clock import targets_for

WORKING_SETS = 2


def next_set_number(logged_sets: Iterable[LoggedSet], exercise_id: int) -> int:
    """Set number for the next set logged against an exercise.

    Numbers keep rising after a deleted set, so they stay unique.
    """
    return max((s.set_number for s in logged_sets if s.exercise_id == exercise_id), default=0) + 1


def build_plan(
    position: CyclePosition,
    exercises: Iterable[Exercise],
    weights: Mapping[int, float],
    logged_sets: Iterable[LoggedSet] = (),
) -> list[PlannedSet]:
    """Merge logged sets with the prescription for unlogged exercises.

    Exercises that already have logged sets keep them as-is (their
    prescription was fixed when logged). Every other exercise gets
    ``WORKING_SETS`` empty slots computed from ``position``, so a reopened
    session is prescribed against its own week and day type. The result is
    ordered by exercise name, then set number.
    """
    logged_sets = list(logged_sets)
    names = {ex.id: ex.name for ex in exercises}
    logged_ids = {s.exercise_id for s in logged_sets}

    plan = [
        PlannedSet(
            exercise_id=s.exercise_id,
            exercise_name=s.exercise_name or names.get(s.exercise_id, ""),
            set_number=s.set_number,
            prescribed_weight=s.prescribed_weight,
            prescribed_reps=s.prescribed_reps,
            logged=s,
        )
        for s in logged_sets
    ]

    for exercise_id, name in names.items():
        if exercise_id in logged_ids:
            continue
        target = targets_for(position, weights.get(exercise_id), exercise_id=exercise_id)
        for set_number in range(1, WORKING_SETS + 1):
            plan.append(
                PlannedSet(
                    exercise_id=exercise_id,
                    exercise_name=name,
                    set_number=set_number,
                    prescribed_weight=target.target_weight,
                    prescribed_reps=target.target_reps,
                )
            )

    return sorted(plan, key=lambda p: (p.exercise_name, p.set_number))
