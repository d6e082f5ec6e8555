"""Request dependencies shared by the routers."""

from fastapi import Request

from ..services import CardioService, ConfirmationRegistry, WorkoutService


def get_workout_service(request: Request) -> WorkoutService:
    """Get the shared workout service from app state."""
    return request.app.state.workout_service


def get_cardio_service(request: Request) -> CardioService:
    """Get the shared cardio service from app state."""
    return request.app.state.cardio_service


def get_confirmations(request: Request) -> ConfirmationRegistry:
    """Get the confirmation registry shared by both services."""
    return request.app.state.confirmations
