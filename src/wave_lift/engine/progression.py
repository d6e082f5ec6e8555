"""Automatic load progression ("level up").

On the Heavy day of week 5, an exercise whose two working sets both meet or
beat their target gets its baseline raised by 10%, rounded to the nearest
0.25. This happens at most once per exercise per workout session.
"""

import threading
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from ..models.cycle import CyclePosition, DayType
from ..models.workout import Outcome
from .cycle_clock import round_to_increment, validate_position

LEVEL_UP_WEEK = 5
LEVEL_UP_DAY = DayType.HEAVY
LEVEL_UP_FACTOR = Decimal("1.10")
REQUIRED_SUCCESSFUL_SETS = 2


@dataclass(frozen=True)
class LevelUp:
    """A fired progression for one exercise."""

    exercise_id: int
    previous_weight: float
    new_weight: float

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "exercise_id": self.exercise_id,
            "previous_weight": self.previous_weight,
            "new_weight": self.new_weight,
        }


def is_level_up_window(position: CyclePosition) -> bool:
    """True only on the week-5 Heavy day."""
    validate_position(position)
    return position.week == LEVEL_UP_WEEK and DayType(position.day_type) == LEVEL_UP_DAY


def count_successful(outcomes: Iterable[Outcome | str]) -> int:
    """Number of outcomes that met or exceeded target."""
    return sum(1 for o in outcomes if Outcome(o).is_successful)


def is_level_up_eligible(outcomes: Iterable[Outcome | str]) -> bool:
    """Read-only form of the firing rule, for highlighting."""
    return count_successful(outcomes) >= REQUIRED_SUCCESSFUL_SETS


def next_prescribed_weight(current_weight: float | None) -> float:
    """Baseline after a level up. A missing baseline counts as 0."""
    return round_to_increment(Decimal(str(current_weight or 0)) * LEVEL_UP_FACTOR)


def check_level_up(
    exercise_id: int,
    outcomes: Iterable[Outcome | str],
    current_weight: float | None,
    already_leveled: Iterable[int] = frozenset(),
) -> float | None:
    """Stateless progression check.

    Returns the new baseline, or None when the rule does not fire or the
    exercise is in ``already_leveled``. The caller owns the flag set and the
    window check.
    """
    if exercise_id in set(already_leveled):
        return None
    if not is_level_up_eligible(outcomes):
        return None
    return next_prescribed_weight(current_weight)


class ProgressionEngine:
    """Progression state for one workout session.

    Holds the set of exercises already leveled this session. The
    check-and-set in ``check_level_up`` runs under a lock so concurrent set
    submissions for the same exercise cannot progress it twice.
    """

    def __init__(self, position: CyclePosition, leveled: Iterable[int] = ()):
        self.position = validate_position(position)
        self._leveled: set[int] = set(leveled)
        self._lock = threading.Lock()

    @property
    def in_window(self) -> bool:
        return is_level_up_window(self.position)

    def has_leveled(self, exercise_id: int) -> bool:
        """Whether the exercise already progressed this session."""
        with self._lock:
            return exercise_id in self._leveled

    def mark_leveled(self, exercise_id: int) -> None:
        """Record a progression that happened elsewhere (e.g. a prior process)."""
        with self._lock:
            self._leveled.add(exercise_id)

    def is_level_up_eligible(self, exercise_id: int, outcomes: Iterable[Outcome | str]) -> bool:
        """Whether the exercise currently satisfies the firing rule.

        Does not consult or change the already-leveled flag, so a highlighted
        exercise stays highlighted after it progresses.
        """
        return self.in_window and is_level_up_eligible(outcomes)

    def check_level_up(
        self,
        exercise_id: int,
        outcomes: Iterable[Outcome | str],
        current_weight: float | None,
    ) -> LevelUp | None:
        """Fire a progression for the exercise at most once per session."""
        if not self.in_window:
            return None

        outcomes = list(outcomes)
        with self._lock:
            new_weight = check_level_up(
                exercise_id, outcomes, current_weight, already_leveled=self._leveled
            )
            if new_weight is None:
                return None
            self._leveled.add(exercise_id)

        return LevelUp(
            exercise_id=exercise_id,
            previous_weight=float(current_weight or 0),
            new_weight=new_weight,
        )
