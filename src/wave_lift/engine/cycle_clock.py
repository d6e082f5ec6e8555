"""Cycle clock: position stepping and per-position training targets.

The wave runs five weeks. Each week has three training days, always taken
in the order Heavy, Medium, Light. The week number fixes the rep target and
the day type fixes what fraction of the exercise's baseline weight is
prescribed.
"""

from decimal import ROUND_HALF_UP, Decimal

from ..models.cycle import CyclePosition, DayType, ExerciseTarget
from .errors import InvalidState

WEEKS_PER_CYCLE = 5

# Fixed domain rules, not user policy
REPS_BY_WEEK = {1: 8, 2: 6, 3: 4, 4: 3, 5: 2}

DAY_MULTIPLIERS = {
    DayType.HEAVY: Decimal("1.00"),
    DayType.MEDIUM: Decimal("0.85"),
    DayType.LIGHT: Decimal("0.70"),
}

DAY_ORDER = (DayType.HEAVY, DayType.MEDIUM, DayType.LIGHT)

WEIGHT_INCREMENT = Decimal("0.25")


def round_to_increment(value: float | Decimal) -> float:
    """Round to the nearest 0.25, halves rounding up.

    Decimal arithmetic keeps the result stable, so rounding an already
    rounded value returns it unchanged.
    """
    steps = (Decimal(str(value)) / WEIGHT_INCREMENT).quantize(
        Decimal("1"), rounding=ROUND_HALF_UP
    )
    return float(steps * WEIGHT_INCREMENT)


def _check_week(week: int) -> int:
    if isinstance(week, bool) or not isinstance(week, int):
        raise InvalidState(f"Week must be an integer, got {week!r}")
    if week < 1 or week > WEEKS_PER_CYCLE:
        raise InvalidState(f"Week {week} is outside 1..{WEEKS_PER_CYCLE}")
    return week


def _check_day_type(day_type: DayType | str) -> DayType:
    try:
        return DayType(day_type)
    except ValueError:
        raise InvalidState(f"Unknown day type {day_type!r}") from None


def validate_position(position: CyclePosition) -> CyclePosition:
    """Return the position unchanged, or raise InvalidState."""
    _check_week(position.week)
    _check_day_type(position.day_type)
    if isinstance(position.cycle_number, bool) or not isinstance(position.cycle_number, int):
        raise InvalidState(f"Cycle number must be an integer, got {position.cycle_number!r}")
    if position.cycle_number < 1:
        raise InvalidState(f"Cycle number {position.cycle_number} must be >= 1")
    return position


def reps_for_week(week: int) -> int:
    """Rep target for every working set in the given week."""
    return REPS_BY_WEEK[_check_week(week)]


def weight_multiplier(day_type: DayType | str) -> Decimal:
    """Fraction of the baseline weight prescribed on a day type."""
    return DAY_MULTIPLIERS[_check_day_type(day_type)]


def target_weight(prescribed_weight: float | None, day_type: DayType | str) -> float:
    """Working weight for a day type, rounded to the nearest 0.25."""
    baseline = Decimal(str(prescribed_weight or 0))
    return round_to_increment(baseline * weight_multiplier(day_type))


def targets_for(
    position: CyclePosition,
    prescribed_weight: float | None,
    exercise_id: int | None = None,
) -> ExerciseTarget:
    """Derive weight and rep targets for one exercise at a position.

    A missing baseline (exercise never weighed) is treated as 0.
    """
    validate_position(position)
    day_type = DayType(position.day_type)
    return ExerciseTarget(
        exercise_id=exercise_id,
        prescribed_weight=float(prescribed_weight or 0),
        day_type=day_type,
        week=position.week,
        target_weight=target_weight(prescribed_weight, day_type),
        target_reps=reps_for_week(position.week),
    )


def advance(position: CyclePosition) -> CyclePosition:
    """Step to the next training day.

    Heavy -> Medium -> Light, then the next week's Heavy day. Past week 5
    the wave restarts at week 1 of the next cycle.
    """
    validate_position(position)
    day_index = DAY_ORDER.index(DayType(position.day_type))

    if day_index + 1 < len(DAY_ORDER):
        return CyclePosition(
            week=position.week,
            day_type=DAY_ORDER[day_index + 1],
            cycle_number=position.cycle_number,
        )

    if position.week < WEEKS_PER_CYCLE:
        return CyclePosition(
            week=position.week + 1,
            day_type=DAY_ORDER[0],
            cycle_number=position.cycle_number,
        )

    return CyclePosition(
        week=1,
        day_type=DAY_ORDER[0],
        cycle_number=position.cycle_number + 1,
    )


def position_key(position: CyclePosition) -> tuple[int, int, int]:
    """Sort key giving the total order over positions."""
    validate_position(position)
    return (
        position.cycle_number,
        position.week,
        DAY_ORDER.index(DayType(position.day_type)),
    )


def start_position() -> CyclePosition:
    """Position a new user starts at."""
    return CyclePosition(week=1, day_type=DAY_ORDER[0], cycle_number=1)
