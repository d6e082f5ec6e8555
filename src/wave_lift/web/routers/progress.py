"""Cycle position and baseline weight routes."""

from datetime import date

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ...models.cycle import CyclePosition, DayType
from ...services import CardioService, WorkoutService
from ..dependencies import get_cardio_service, get_workout_service

router = APIRouter(tags=["progress"])


class PositionIn(BaseModel):
    week: int
    day_type: DayType
    cycle_number: int = 1


class WeightIn(BaseModel):
    exercise_id: int
    weight: float = Field(ge=0)


@router.get("/progress")
async def get_progress(
    service: WorkoutService = Depends(get_workout_service),
    cardio: CardioService = Depends(get_cardio_service),
):
    """Current position, today's targets and weekly adherence."""
    today = date.today()
    position = await service.current_position()
    targets = await service.targets(position)
    return {
        "position": position.to_dict(),
        "display": position.get_position_display(),
        "targets": [t.to_dict() for t in targets],
        "weekly_workouts": await service.weekly_workout_count(today),
        "cardio": (await cardio.adherence(today)).to_dict(),
    }


@router.put("/progress")
async def set_progress(
    body: PositionIn,
    service: WorkoutService = Depends(get_workout_service),
):
    """Jump to a specific position."""
    position = await service.set_position(
        CyclePosition(week=body.week, day_type=body.day_type, cycle_number=body.cycle_number)
    )
    return {"status": "set", "position": position.to_dict()}


@router.post("/progress/reset")
async def reset_progress(service: WorkoutService = Depends(get_workout_service)):
    """Return to Week 1, Heavy day, Cycle 1."""
    position = await service.reset_progress()
    return {"status": "reset", "position": position.to_dict()}


@router.get("/weights")
async def list_weights(service: WorkoutService = Depends(get_workout_service)):
    """Baseline weight per exercise."""
    weights = await service.get_weights()
    return [
        {"exercise_id": ex.id, "name": ex.name, "weight": weights.get(ex.id)}
        for ex in await service.list_exercises()
    ]


@router.put("/weights")
async def set_weight(
    body: WeightIn,
    service: WorkoutService = Depends(get_workout_service),
):
    """Edit a baseline weight. The write is debounced."""
    await service.set_weight(body.exercise_id, body.weight)
    return {"status": "accepted", "exercise_id": body.exercise_id, "weight": body.weight}
