"""Cardio session and adherence models."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class CardioSession:
    """A logged cardio session.

    ``is_interval_session`` marks a Norwegian 4x4 workout (4 min high
    intensity, 3 min recovery, repeated 4 times).
    """

    workout_date: date
    activity_type: str
    duration_minutes: float
    is_interval_session: bool = False
    id: int | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "workout_date": self.workout_date.isoformat(),
            "activity_type": self.activity_type,
            "duration_minutes": self.duration_minutes,
            "is_interval_session": self.is_interval_session,
        }

    @classmethod
    def from_dict(cls, data: dict, id: int | None = None) -> "CardioSession":
        """Create from dictionary."""
        workout_date = data["workout_date"]
        if isinstance(workout_date, str):
            workout_date = date.fromisoformat(workout_date)
        return cls(
            id=id,
            workout_date=workout_date,
            activity_type=data["activity_type"],
            duration_minutes=data["duration_minutes"],
            is_interval_session=bool(data.get("is_interval_session", False)),
        )


@dataclass(frozen=True)
class CardioAdherence:
    """Derived adherence indicators for a reference day."""

    aerobic_minutes: float
    next_interval_due: date
    missed_interval_count: int
    aerobic_target_minutes: int = 150

    @property
    def aerobic_minutes_remaining(self) -> float:
        return max(0, self.aerobic_target_minutes - self.aerobic_minutes)

    @property
    def aerobic_target_met(self) -> bool:
        return self.aerobic_minutes >= self.aerobic_target_minutes

    def is_interval_overdue(self, today: date) -> bool:
        """True when the next interval session is already past due."""
        return self.next_interval_due < today

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "aerobic_minutes": self.aerobic_minutes,
            "aerobic_target_minutes": self.aerobic_target_minutes,
            "aerobic_minutes_remaining": self.aerobic_minutes_remaining,
            "aerobic_target_met": self.aerobic_target_met,
            "next_interval_due": self.next_interval_due.isoformat(),
            "missed_interval_count": self.missed_interval_count,
        }
