"""Interactive prompts for logging sessions."""

from dataclasses import dataclass

import questionary
from questionary import Style

# Custom style for questionnaires
custom_style = Style(
    [
        ("qmark", "fg:#673ab7 bold"),
        ("question", "bold"),
        ("answer", "fg:#f44336 bold"),
        ("pointer", "fg:#673ab7 bold"),
        ("highlighted", "fg:#673ab7 bold"),
        ("selected", "fg:#cc5454"),
        ("instruction", ""),
        ("text", ""),
    ]
)

ACTIVITY_CHOICES = ["Running", "Cycling", "Rowing", "Swimming", "Walking", "Elliptical"]


@dataclass
class CardioAnswers:
    activity_type: str
    duration_minutes: float
    is_interval_session: bool


def _validate_minutes(text: str) -> bool | str:
    try:
        value = float(text)
    except ValueError:
        return "Enter a number of minutes"
    return True if value > 0 else "Duration must be positive"


class CardioQuestionnaire:
    """Asks for the details of a cardio session."""

    async def collect(self) -> CardioAnswers | None:
        """Run the questionnaire. Returns None if the user aborts."""
        activity = await questionary.select(
            "What did you do?",
            choices=ACTIVITY_CHOICES + ["Other..."],
            style=custom_style,
        ).ask_async()
        if activity is None:
            return None

        if activity == "Other...":
            activity = await questionary.text(
                "Activity type:",
                validate=lambda t: bool(t.strip()) or "Activity type is required",
                style=custom_style,
            ).ask_async()
            if activity is None:
                return None

        is_interval = await questionary.confirm(
            "Was this a Norwegian 4x4 workout? (4 min hard, 3 min easy, x4)",
            default=False,
            style=custom_style,
        ).ask_async()
        if is_interval is None:
            return None

        minutes = await questionary.text(
            "Duration (minutes):",
            validate=_validate_minutes,
            style=custom_style,
        ).ask_async()
        if minutes is None:
            return None

        return CardioAnswers(
            activity_type=activity.strip(),
            duration_minutes=float(minutes),
            is_interval_session=is_interval,
        )
