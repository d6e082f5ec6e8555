"""Confirmation routes for two-phase deletes."""

from fastapi import APIRouter, Depends

from ...services import (
    CardioService,
    ConfirmationAction,
    ConfirmationError,
    ConfirmationRegistry,
    WorkoutService,
)
from ..dependencies import get_cardio_service, get_confirmations, get_workout_service

router = APIRouter(prefix="/confirmations", tags=["confirmations"])


@router.post("/{token}")
async def confirm(
    token: str,
    registry: ConfirmationRegistry = Depends(get_confirmations),
    workouts: WorkoutService = Depends(get_workout_service),
    cardio: CardioService = Depends(get_cardio_service),
):
    """Perform the delete a token was issued for."""
    pending = await registry.get(token)
    if pending is None:
        raise ConfirmationError("Unknown or already used confirmation token")

    if pending.action == ConfirmationAction.DELETE_CARDIO:
        done = await cardio.confirm_delete(token)
    else:
        done = await workouts.confirm_delete(token)
    return {"status": "deleted", "action": done.action.value, "target_id": done.target_id}


@router.delete("/{token}")
async def cancel(token: str, registry: ConfirmationRegistry = Depends(get_confirmations)):
    """Drop a pending token."""
    return {"status": "cancelled" if await registry.cancel(token) else "unknown"}
