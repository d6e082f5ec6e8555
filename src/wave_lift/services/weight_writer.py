"""Debounced persistence of baseline weights.

Updates submitted within ``debounce_ms`` of each other are coalesced into
a single write; for each exercise the last submitted value wins.
"""

import asyncio
import logging

from ..db.repositories import WeightRepository

logger = logging.getLogger(__name__)


class WeightWriter:
    """Coalesces baseline weight writes."""

    def __init__(self, repository: WeightRepository, debounce_ms: int = 500):
        self.repository = repository
        self.debounce_ms = debounce_ms
        self._pending: dict[int, float] = {}
        self._task: asyncio.Task | None = None
        # Held for the whole write, so flush() waits on one in flight
        self._lock = asyncio.Lock()

    def pending(self) -> dict[int, float]:
        """Values submitted but not yet written."""
        return dict(self._pending)

    async def submit(self, exercise_id: int, weight: float) -> None:
        """Queue a baseline update; writes through when debounce is 0."""
        if self.debounce_ms <= 0:
            await self.repository.upsert(exercise_id, weight)
            return

        async with self._lock:
            self._pending[exercise_id] = weight
            if self._task is not None:
                self._task.cancel()
            self._task = asyncio.create_task(self._flush_later())

    async def flush(self) -> int:
        """Write all pending values now. Returns the number written.

        On failure the values stay pending and the error propagates.
        """
        async with self._lock:
            task, self._task = self._task, None
            if task is not None and task is not asyncio.current_task():
                task.cancel()

            pending = self._pending
            if not pending:
                return 0
            await self.repository.upsert_many(pending)
            self._pending = {}

        logger.debug("Flushed %d baseline weight update(s)", len(pending))
        return len(pending)

    async def _flush_later(self) -> None:
        await asyncio.sleep(self.debounce_ms / 1000)
        try:
            await self.flush()
        except Exception:
            logger.exception(
                "Deferred baseline write failed; %d update(s) kept pending", len(self._pending)
            )
