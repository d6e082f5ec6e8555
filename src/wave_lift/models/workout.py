"""Strength workout session and logged set models."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from .cycle import CyclePosition, DayType


class Outcome(str, Enum):
    """Result of a logged set against its prescription."""

    INCOMPLETE = "Incomplete"
    COMPLETE = "Complete"
    EXCEEDED = "Exceeded"

    @property
    def is_successful(self) -> bool:
        """True when the target was met or exceeded."""
        return self in (Outcome.COMPLETE, Outcome.EXCEEDED)


@dataclass
class LoggedSet:
    """One working set logged against a prescription."""

    session_id: int
    exercise_id: int
    set_number: int
    prescribed_weight: float
    prescribed_reps: int
    actual_weight: float
    actual_reps: int
    outcome: Outcome = Outcome.INCOMPLETE
    exercise_name: str = ""
    id: int | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "session_id": self.session_id,
            "exercise_id": self.exercise_id,
            "exercise_name": self.exercise_name,
            "set_number": self.set_number,
            "prescribed_weight": self.prescribed_weight,
            "prescribed_reps": self.prescribed_reps,
            "actual_weight": self.actual_weight,
            "actual_reps": self.actual_reps,
            "outcome": self.outcome.value,
        }

    @classmethod
    def from_dict(cls, data: dict, id: int | None = None) -> "LoggedSet":
        """Create from dictionary."""
        return cls(
            id=id,
            session_id=data["session_id"],
            exercise_id=data["exercise_id"],
            exercise_name=data.get("exercise_name", ""),
            set_number=data["set_number"],
            prescribed_weight=data["prescribed_weight"],
            prescribed_reps=data["prescribed_reps"],
            actual_weight=data["actual_weight"],
            actual_reps=data["actual_reps"],
            outcome=Outcome(data.get("outcome", Outcome.INCOMPLETE.value)),
        )

    def get_display(self) -> str:
        """Get a human-readable summary of the set."""
        return (
            f"Set {self.set_number}: {self.actual_weight}kg × {self.actual_reps} reps "
            f"(target {self.prescribed_weight}kg × {self.prescribed_reps}) - {self.outcome.value}"
        )


@dataclass
class WorkoutSession:
    """A strength workout at a fixed cycle position.

    The week/day/cycle identity never changes once created, even when the
    session is reopened to correct its sets.
    """

    week: int
    day_type: DayType
    cycle_number: int
    workout_date: date
    finished_at: datetime | None = None
    sets: list[LoggedSet] = field(default_factory=list)
    id: int | None = None

    @property
    def position(self) -> CyclePosition:
        """The cycle position this session was performed at."""
        return CyclePosition(
            week=self.week, day_type=self.day_type, cycle_number=self.cycle_number
        )

    @property
    def is_finished(self) -> bool:
        return self.finished_at is not None

    def sets_for(self, exercise_id: int) -> list[LoggedSet]:
        """Logged sets for one exercise, in set order."""
        return sorted(
            (s for s in self.sets if s.exercise_id == exercise_id),
            key=lambda s: s.set_number,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "week": self.week,
            "day_type": self.day_type.value,
            "cycle_number": self.cycle_number,
            "workout_date": self.workout_date.isoformat(),
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
            "sets": [s.to_dict() | {"id": s.id} for s in self.sets],
        }

    def get_summary(self) -> str:
        """Get a short summary line for history listings."""
        return f"{len(self.sets)} sets completed"


@dataclass(frozen=True)
class PlannedSet:
    """A prescribed set slot shown while a workout is in progress."""

    exercise_id: int
    exercise_name: str
    set_number: int
    prescribed_weight: float
    prescribed_reps: int
    logged: LoggedSet | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "exercise_id": self.exercise_id,
            "exercise_name": self.exercise_name,
            "set_number": self.set_number,
            "prescribed_weight": self.prescribed_weight,
            "prescribed_reps": self.prescribed_reps,
            "logged": self.logged.to_dict() | {"id": self.logged.id} if self.logged else None,
        }
