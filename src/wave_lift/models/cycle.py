"""Wave cycle position model."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class DayType(str, Enum):
    """Training day types within a week of the wave."""

    HEAVY = "Heavy"
    MEDIUM = "Medium"
    LIGHT = "Light"


@dataclass(frozen=True)
class CyclePosition:
    """The user's place in the 5-week wave.

    Only ``engine.cycle_clock.advance`` produces a successor; positions
    are otherwise treated as values.
    """

    week: int = 1
    day_type: DayType = DayType.HEAVY
    cycle_number: int = 1

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "week": self.week,
            "day_type": self.day_type.value,
            "cycle_number": self.cycle_number,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CyclePosition":
        """Create from dictionary."""
        return cls(
            week=data.get("week", 1),
            day_type=DayType(data.get("day_type", DayType.HEAVY.value)),
            cycle_number=data.get("cycle_number", 1),
        )

    def get_position_display(self) -> str:
        """Get a human-readable position string."""
        return f"Week {self.week} • {self.day_type.value} Day • Cycle {self.cycle_number}"


@dataclass
class ProgressRecord:
    """The single persisted current-progress row."""

    position: CyclePosition
    updated_at: datetime | None = None
    id: int | None = None


@dataclass(frozen=True)
class ExerciseTarget:
    """Prescription for one exercise at a given position.

    Not persisted; computed on demand from the stored baseline.
    """

    exercise_id: int | None
    prescribed_weight: float
    day_type: DayType
    week: int
    target_weight: float
    target_reps: int

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "exercise_id": self.exercise_id,
            "prescribed_weight": self.prescribed_weight,
            "day_type": self.day_type.value,
            "week": self.week,
            "target_weight": self.target_weight,
            "target_reps": self.target_reps,
        }
