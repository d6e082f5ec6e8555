"""Cardio routes."""

from datetime import date

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ...services import CardioService
from ..dependencies import get_cardio_service

router = APIRouter(prefix="/cardio", tags=["cardio"])


class CardioIn(BaseModel):
    activity_type: str = Field(min_length=1)
    duration_minutes: float = Field(gt=0)
    is_interval_session: bool = False
    workout_date: date | None = None


@router.get("")
async def list_sessions(
    limit: int = 5,
    service: CardioService = Depends(get_cardio_service),
):
    """Recent cardio sessions, newest first."""
    return [s.to_dict() | {"id": s.id} for s in await service.recent(limit)]


@router.post("")
async def log_session(
    body: CardioIn,
    service: CardioService = Depends(get_cardio_service),
):
    """Log a cardio session and return updated adherence."""
    session = await service.log_session(
        body.activity_type,
        body.duration_minutes,
        is_interval_session=body.is_interval_session,
        workout_date=body.workout_date,
    )
    return {
        "session": session.to_dict() | {"id": session.id},
        "adherence": (await service.adherence()).to_dict(),
    }


@router.get("/adherence")
async def get_adherence(
    today: date | None = None,
    service: CardioService = Depends(get_cardio_service),
):
    """Zone 2 minutes, next 4x4 due date and missed 4x4 weeks."""
    return (await service.adherence(today)).to_dict()


@router.post("/{session_id}/delete-request")
async def request_delete(
    session_id: int,
    service: CardioService = Depends(get_cardio_service),
):
    """Ask to delete a cardio session."""
    return (await service.request_delete(session_id)).to_dict()
