"""Strength workout orchestration.

Threads the explicit state (current cycle position, active session, stored
baselines) between the record store and the rules engine.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path

from ..config import Settings
from ..db.repositories import (
    ExerciseRepository,
    ProgressRepository,
    WeightRepository,
    WorkoutRepository,
)
from ..engine.cardio_adherence import weekday_on_or_before, weekly_workout_count
from ..engine.cycle_clock import advance, start_position, targets_for, validate_position
from ..engine.progression import LevelUp, ProgressionEngine, is_level_up_window
from ..engine.session_plan import build_plan, next_set_number
from ..engine.set_evaluator import evaluate
from ..models.cycle import CyclePosition, ExerciseTarget
from ..models.exercises import Exercise
from ..models.workout import LoggedSet, PlannedSet, WorkoutSession
from .confirmations import ConfirmationAction, ConfirmationRegistry, ConfirmationToken
from .errors import NotFoundError
from .weight_writer import WeightWriter

logger = logging.getLogger(__name__)


@dataclass
class WorkoutPlan:
    """A session with its prescribed and logged sets."""

    session: WorkoutSession
    sets: list[PlannedSet]
    eligible_exercise_ids: set[int] = field(default_factory=set)
    leveled_exercise_ids: set[int] = field(default_factory=set)

    def to_dict(self) -> dict:
        return {
            "session": self.session.to_dict(),
            "sets": [s.to_dict() for s in self.sets],
            "eligible_exercise_ids": sorted(self.eligible_exercise_ids),
            "leveled_exercise_ids": sorted(self.leveled_exercise_ids),
        }


@dataclass
class SetResult:
    """Outcome of logging or editing a set."""

    logged_set: LoggedSet
    level_up: LevelUp | None = None

    def to_dict(self) -> dict:
        return {
            "set": self.logged_set.to_dict() | {"id": self.logged_set.id},
            "level_up": self.level_up.to_dict() if self.level_up else None,
        }


class WorkoutService:
    """Service for the strength side of the tracker."""

    def __init__(
        self,
        db_path: Path | None = None,
        settings: Settings | None = None,
        confirmations: ConfirmationRegistry | None = None,
        weight_writer: WeightWriter | None = None,
    ):
        self.settings = settings or Settings.from_env()
        self.exercises = ExerciseRepository(db_path)
        self.weights = WeightRepository(db_path)
        self.progress = ProgressRepository(db_path)
        self.workouts = WorkoutRepository(db_path)
        self.confirmations = confirmations or ConfirmationRegistry(
            ttl_seconds=self.settings.confirm_ttl_seconds
        )
        self.weight_writer = weight_writer or WeightWriter(
            self.weights, debounce_ms=self.settings.debounce_ms
        )
        # Set submissions within one session run one at a time
        self._session_locks: dict[int, asyncio.Lock] = {}

    async def __aenter__(self) -> "WorkoutService":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        """Flush any pending baseline writes."""
        await self.weight_writer.flush()

    # Progress

    async def current_position(self) -> CyclePosition:
        """Current cycle position, onboarding a new user at the cycle start."""
        record = await self.progress.get()
        if record is None:
            position = start_position()
            await self.progress.upsert(position)
            logger.info("Started tracking at %s", position.get_position_display())
            return position
        return record.position

    async def set_position(self, position: CyclePosition) -> CyclePosition:
        """Jump to a specific position (manual correction)."""
        validate_position(position)
        await self.progress.upsert(position)
        return position

    async def reset_progress(self) -> CyclePosition:
        """Return to week 1 of cycle 1."""
        return await self.set_position(start_position())

    # Exercises and baselines

    async def list_exercises(self) -> list[Exercise]:
        return await self.exercises.list_all()

    async def get_exercise(self, exercise_id: int) -> Exercise:
        exercise = await self.exercises.get(exercise_id)
        if exercise is None:
            raise NotFoundError(f"Exercise {exercise_id} not found")
        return exercise

    async def get_weights(self) -> dict[int, float]:
        """Baselines, including writes still waiting on the debounce window."""
        return await self.weights.get_all() | self.weight_writer.pending()

    async def set_weight(self, exercise_id: int, weight: float) -> None:
        """Manually edit an exercise's baseline weight."""
        if weight < 0:
            raise ValueError("Weight cannot be negative")
        await self.get_exercise(exercise_id)
        await self.weight_writer.submit(exercise_id, weight)

    async def targets(self, position: CyclePosition | None = None) -> list[ExerciseTarget]:
        """Today's targets for every exercise."""
        position = position or await self.current_position()
        weights = await self.get_weights()
        return [
            targets_for(position, weights.get(ex.id), exercise_id=ex.id)
            for ex in await self.list_exercises()
        ]

    # Sessions

    async def start_workout(self, today: date | None = None) -> WorkoutPlan:
        """Create a session at the current position."""
        position = await self.current_position()
        session = WorkoutSession(
            week=position.week,
            day_type=position.day_type,
            cycle_number=position.cycle_number,
            workout_date=today or date.today(),
        )
        session.id = await self.workouts.create(session)
        logger.info("Started workout %s at %s", session.id, position.get_position_display())
        return await self.get_plan(session.id)

    async def get_session(self, session_id: int) -> WorkoutSession:
        session = await self.workouts.get(session_id)
        if session is None:
            raise NotFoundError(f"Workout {session_id} not found")
        return session

    async def get_plan(self, session_id: int) -> WorkoutPlan:
        """Prescribed and logged sets for a session."""
        session = await self.get_session(session_id)
        exercises = await self.list_exercises()
        weights = await self.get_weights()
        leveled = await self.workouts.leveled_exercises(session_id)
        engine = ProgressionEngine(session.position, leveled)

        eligible = {
            ex.id
            for ex in exercises
            if engine.is_level_up_eligible(ex.id, [s.outcome for s in session.sets_for(ex.id)])
        }
        return WorkoutPlan(
            session=session,
            sets=build_plan(session.position, exercises, weights, session.sets),
            eligible_exercise_ids=eligible,
            leveled_exercise_ids=leveled,
        )

    async def reopen_workout(self, session_id: int) -> WorkoutPlan:
        """Load a finished session for corrective editing.

        The session keeps its week/day/cycle; exercises without logged sets
        are prescribed against that position, not the current one.
        """
        return await self.get_plan(session_id)

    async def history(self, limit: int | None = 5) -> list[WorkoutSession]:
        return await self.workouts.list_recent(limit)

    async def weekly_workout_count(self, today: date | None = None) -> int:
        """Workouts in the current Sunday-started week."""
        today = today or date.today()
        dates = await self.workouts.dates_since(weekday_on_or_before(today))
        return weekly_workout_count(today, dates)

    async def finish_workout(
        self, session_id: int, now: datetime | None = None
    ) -> CyclePosition:
        """Finish a session and return the (possibly advanced) current position.

        The clock advances only the first time the session at the current
        position is finished; finishing reopened history leaves it alone.
        """
        session = await self.get_session(session_id)
        current = await self.current_position()

        if session.is_finished:
            return current

        await self.workouts.mark_finished(session_id, now or datetime.now())
        await self.weight_writer.flush()

        if session.position != current:
            return current

        next_position = advance(current)
        await self.progress.upsert(next_position)
        logger.info(
            "Workout %s finished; next is %s", session_id, next_position.get_position_display()
        )
        return next_position

    # Sets

    def _session_lock(self, session_id: int) -> asyncio.Lock:
        return self._session_locks.setdefault(session_id, asyncio.Lock())

    async def log_set(
        self,
        session_id: int,
        exercise_id: int,
        actual_weight: float | None = None,
        actual_reps: int | None = None,
    ) -> SetResult:
        """Log one set, classify it and run the progression check.

        Omitted weight or reps default to the prescription.
        """
        async with self._session_lock(session_id):
            session = await self.get_session(session_id)
            exercise = await self.get_exercise(exercise_id)
            prescribed_weight, prescribed_reps = await self._prescription(session, exercise_id)
            if actual_weight is None:
                actual_weight = prescribed_weight
            if actual_reps is None:
                actual_reps = prescribed_reps

            logged = LoggedSet(
                session_id=session_id,
                exercise_id=exercise_id,
                exercise_name=exercise.name,
                set_number=next_set_number(session.sets, exercise_id),
                prescribed_weight=prescribed_weight,
                prescribed_reps=prescribed_reps,
                actual_weight=actual_weight,
                actual_reps=actual_reps,
                outcome=evaluate(actual_weight, actual_reps, prescribed_weight, prescribed_reps),
            )
            logged.id = await self.workouts.add_set(logged)
            session.sets.append(logged)

            level_up = await self._apply_progression(session, exercise_id)
        return SetResult(logged_set=logged, level_up=level_up)

    async def log_prescribed_set(self, session_id: int, exercise_id: int) -> SetResult:
        """Log a set performed exactly as prescribed."""
        return await self.log_set(session_id, exercise_id)

    async def _get_set(self, set_id: int) -> LoggedSet:
        logged = await self.workouts.get_set(set_id)
        if logged is None:
            raise NotFoundError(f"Set {set_id} not found")
        return logged

    async def edit_set(self, set_id: int, actual_weight: float, actual_reps: int) -> SetResult:
        """Correct a logged set; the outcome is recomputed."""
        session_id = (await self._get_set(set_id)).session_id
        async with self._session_lock(session_id):
            logged = await self._get_set(set_id)
            logged.actual_weight = actual_weight
            logged.actual_reps = actual_reps
            logged.outcome = evaluate(
                actual_weight, actual_reps, logged.prescribed_weight, logged.prescribed_reps
            )
            await self.workouts.update_set(logged)

            session = await self.get_session(session_id)
            level_up = await self._apply_progression(session, logged.exercise_id)
        return SetResult(logged_set=logged, level_up=level_up)

    async def _prescription(self, session: WorkoutSession, exercise_id: int) -> tuple[float, int]:
        """Target for an exercise in a session.

        Once a set is logged the prescription is fixed for the session, so a
        mid-session level up does not move the target of later sets.
        """
        existing = session.sets_for(exercise_id)
        if existing:
            return existing[0].prescribed_weight, existing[0].prescribed_reps

        weights = await self.get_weights()
        target = targets_for(session.position, weights.get(exercise_id), exercise_id=exercise_id)
        return target.target_weight, target.target_reps

    async def _apply_progression(self, session: WorkoutSession, exercise_id: int) -> LevelUp | None:
        if not is_level_up_window(session.position):
            return None

        leveled = await self.workouts.leveled_exercises(session.id)
        engine = ProgressionEngine(session.position, leveled)
        weights = await self.get_weights()
        level_up = engine.check_level_up(
            exercise_id,
            [s.outcome for s in session.sets_for(exercise_id)],
            weights.get(exercise_id),
        )
        if level_up is None:
            return None

        # The unique (session, exercise) row is the cross-process check-and-set
        if not await self.workouts.record_level_up(session.id, level_up):
            return None

        await self.weight_writer.submit(exercise_id, level_up.new_weight)
        logger.info(
            "Level up for exercise %s: %s -> %s",
            exercise_id,
            level_up.previous_weight,
            level_up.new_weight,
        )
        return level_up

    # Deletes

    async def request_delete_workout(self, session_id: int) -> ConfirmationToken:
        session = await self.get_session(session_id)
        return await self.confirmations.request(
            ConfirmationAction.DELETE_WORKOUT,
            session_id,
            f"Delete workout from {session.workout_date.isoformat()} "
            f"({session.position.get_position_display()})? This cannot be undone.",
        )

    async def request_delete_set(self, set_id: int) -> ConfirmationToken:
        logged = await self._get_set(set_id)
        return await self.confirmations.request(
            ConfirmationAction.DELETE_SET,
            set_id,
            f"Delete {logged.exercise_name} set {logged.set_number}?",
        )

    async def confirm_delete(self, token: str) -> ConfirmationToken:
        """Perform the delete a token was issued for."""
        pending = await self.confirmations.redeem(
            token, actions=(ConfirmationAction.DELETE_WORKOUT, ConfirmationAction.DELETE_SET)
        )
        if pending.action == ConfirmationAction.DELETE_WORKOUT:
            await self.workouts.delete(pending.target_id)
        else:
            await self.workouts.delete_set(pending.target_id)
        return pending
