"""Strength workout routes."""

from datetime import date

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ...services import WorkoutService
from ..dependencies import get_workout_service

router = APIRouter(prefix="/workouts", tags=["workouts"])


class WorkoutIn(BaseModel):
    workout_date: date | None = None


class SetIn(BaseModel):
    """One set. Omitted weight or reps default to the prescription."""

    exercise_id: int
    actual_weight: float | None = Field(default=None, ge=0)
    actual_reps: int | None = Field(default=None, ge=0)


class SetEditIn(BaseModel):
    actual_weight: float = Field(ge=0)
    actual_reps: int = Field(ge=0)


@router.get("")
async def list_workouts(
    limit: int = 5,
    service: WorkoutService = Depends(get_workout_service),
):
    """Recent workouts, newest first."""
    return [s.to_dict() for s in await service.history(limit)]


@router.post("")
async def start_workout(
    body: WorkoutIn | None = None,
    service: WorkoutService = Depends(get_workout_service),
):
    """Start a workout at the current position."""
    plan = await service.start_workout(body.workout_date if body else None)
    return plan.to_dict()


@router.get("/{session_id}")
async def get_workout(
    session_id: int,
    service: WorkoutService = Depends(get_workout_service),
):
    """A workout with its prescribed and logged sets."""
    return (await service.get_plan(session_id)).to_dict()


@router.post("/{session_id}/sets")
async def log_set(
    session_id: int,
    body: SetIn,
    service: WorkoutService = Depends(get_workout_service),
):
    """Log a set and report any level up it triggered."""
    result = await service.log_set(
        session_id, body.exercise_id, body.actual_weight, body.actual_reps
    )
    return result.to_dict()


@router.put("/sets/{set_id}")
async def edit_set(
    set_id: int,
    body: SetEditIn,
    service: WorkoutService = Depends(get_workout_service),
):
    """Correct a logged set."""
    result = await service.edit_set(set_id, body.actual_weight, body.actual_reps)
    return result.to_dict()


@router.post("/{session_id}/finish")
async def finish_workout(
    session_id: int,
    service: WorkoutService = Depends(get_workout_service),
):
    """Finish a workout and return the next position."""
    position = await service.finish_workout(session_id)
    return {
        "status": "finished",
        "next_position": position.to_dict(),
        "display": position.get_position_display(),
        "weekly_workouts": await service.weekly_workout_count(),
    }


@router.post("/{session_id}/delete-request")
async def request_delete_workout(
    session_id: int,
    service: WorkoutService = Depends(get_workout_service),
):
    """Ask to delete a workout. Redeem the token at /confirmations/{token}."""
    return (await service.request_delete_workout(session_id)).to_dict()


@router.post("/sets/{set_id}/delete-request")
async def request_delete_set(
    set_id: int,
    service: WorkoutService = Depends(get_workout_service),
):
    """Ask to delete a single set."""
    return (await service.request_delete_set(set_id)).to_dict()
