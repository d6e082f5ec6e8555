"""Exercise definitions."""

from dataclasses import dataclass, field


@dataclass
class Exercise:
    """A lift tracked through the wave."""

    name: str
    aliases: list[str] = field(default_factory=list)
    id: int | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "name": self.name,
            "aliases": self.aliases,
        }

    @classmethod
    def from_dict(cls, data: dict, id: int | None = None) -> "Exercise":
        """Create from dictionary."""
        return cls(
            id=id,
            name=data["name"],
            aliases=data.get("aliases", []),
        )

    def matches(self, query: str) -> bool:
        """Case-insensitive match on name or alias."""
        needle = " ".join(query.lower().split())
        return needle == self.name.lower() or needle in (a.lower() for a in self.aliases)


# Default library installed by `wave-lift init`
COMMON_EXERCISES = [
    Exercise(name="Squat", aliases=["Back Squat", "BB Squat"]),
    Exercise(name="Bench Press", aliases=["BB Bench", "Flat Bench"]),
    Exercise(name="Deadlift", aliases=["Conventional Deadlift", "DL"]),
    Exercise(name="Overhead Press", aliases=["OHP", "Military Press"]),
    Exercise(name="Barbell Row", aliases=["BB Row", "Bent Over Row"]),
    Exercise(name="Pull Up", aliases=["Pullup", "Weighted Pull Up"]),
]
