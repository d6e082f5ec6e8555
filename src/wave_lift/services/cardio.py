"""Cardio logging and adherence."""

import logging
from datetime import date, timedelta
from pathlib import Path

from ..config import Settings
from ..db.repositories import CardioRepository
from ..engine.cardio_adherence import MISSED_WINDOW_WEEKS, cardio_adherence
from ..models.cardio import CardioAdherence, CardioSession
from .confirmations import ConfirmationAction, ConfirmationRegistry, ConfirmationToken
from .errors import NotFoundError

logger = logging.getLogger(__name__)


class CardioService:
    """Service for cardio sessions and their adherence indicators."""

    def __init__(
        self,
        db_path: Path | None = None,
        settings: Settings | None = None,
        confirmations: ConfirmationRegistry | None = None,
    ):
        self.settings = settings or Settings.from_env()
        self.repository = CardioRepository(db_path)
        self.confirmations = confirmations or ConfirmationRegistry(
            ttl_seconds=self.settings.confirm_ttl_seconds
        )

    async def log_session(
        self,
        activity_type: str,
        duration_minutes: float,
        is_interval_session: bool = False,
        workout_date: date | None = None,
    ) -> CardioSession:
        """Store a cardio session."""
        activity_type = activity_type.strip()
        if not activity_type:
            raise ValueError("Activity type is required")
        if duration_minutes <= 0:
            raise ValueError("Duration must be positive")

        session = CardioSession(
            workout_date=workout_date or date.today(),
            activity_type=activity_type,
            duration_minutes=duration_minutes,
            is_interval_session=is_interval_session,
        )
        session_id = await self.repository.create(session)
        logger.info(
            "Logged %s min of %s%s",
            duration_minutes,
            activity_type,
            " (4x4)" if is_interval_session else "",
        )
        return CardioSession(
            id=session_id,
            workout_date=session.workout_date,
            activity_type=session.activity_type,
            duration_minutes=session.duration_minutes,
            is_interval_session=session.is_interval_session,
        )

    async def recent(self, limit: int = 5) -> list[CardioSession]:
        return await self.repository.list_recent(limit)

    async def history_for(self, today: date) -> list[CardioSession]:
        """Sessions the adherence indicators need for ``today``.

        The 12-week window plus the last 4x4 session, however old it is.
        """
        since = today - timedelta(weeks=MISSED_WINDOW_WEEKS)
        sessions = await self.repository.list_since(since)
        last_interval = await self.repository.last_interval_session(today)
        if last_interval is not None and last_interval.workout_date < since:
            sessions.insert(0, last_interval)
        return sessions

    async def adherence(self, today: date | None = None) -> CardioAdherence:
        """Zone 2 minutes, next 4x4 due date and missed 4x4 weeks."""
        today = today or date.today()
        return cardio_adherence(today, await self.history_for(today))

    async def request_delete(self, session_id: int) -> ConfirmationToken:
        session = await self.repository.get(session_id)
        if session is None:
            raise NotFoundError(f"Cardio session {session_id} not found")
        return await self.confirmations.request(
            ConfirmationAction.DELETE_CARDIO,
            session_id,
            f"Delete {session.activity_type} on {session.workout_date.isoformat()}?",
        )

    async def confirm_delete(self, token: str) -> ConfirmationToken:
        pending = await self.confirmations.redeem(
            token, actions=(ConfirmationAction.DELETE_CARDIO,)
        )
        await self.repository.delete(pending.target_id)
        logger.info("Deleted cardio session %s", pending.target_id)
        return pending
