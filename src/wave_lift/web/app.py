"""FastAPI application for the wave-lift JSON API."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..config import Settings
from ..db.engine import get_db_path, init_db, seed_exercises
from ..services import CardioService, ConfirmationRegistry, WorkoutService
from ..services.errors import NotFoundError
from .routers import cardio, confirmations, progress, workouts

logger = logging.getLogger(__name__)


def create_app(db_path: Path | None = None, settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or Settings.from_env()
    db_path = db_path or get_db_path(settings.data_dir)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialize the database on startup, flush pending writes on shutdown."""
        if not db_path.exists():
            await init_db(db_path)
            await seed_exercises(db_path)
        yield
        await app.state.workout_service.close()

    app = FastAPI(
        title="wave-lift",
        description="5-week wave strength and cardio tracker",
        version="0.1.0",
        lifespan=lifespan,
    )

    # One registry so a token issued by either service can be redeemed here
    registry = ConfirmationRegistry(ttl_seconds=settings.confirm_ttl_seconds)
    app.state.confirmations = registry
    app.state.workout_service = WorkoutService(db_path, settings=settings, confirmations=registry)
    app.state.cardio_service = CardioService(db_path, settings=settings, confirmations=registry)

    app.include_router(progress.router)
    app.include_router(workouts.router)
    app.include_router(cardio.router)
    app.include_router(confirmations.router)

    @app.exception_handler(NotFoundError)
    async def not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ValueError)
    async def bad_request(request: Request, exc: ValueError):
        # InvalidState and ConfirmationError land here too
        logger.debug("Rejected request to %s", request.url.path, exc_info=exc)
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": "0.1.0"}

    return app

