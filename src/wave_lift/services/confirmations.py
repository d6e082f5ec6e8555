"""Two-phase confirmation for destructive actions.

A delete is first requested, which returns a token describing what will
happen. Only redeeming that token performs the delete. Tokens are single
use and expire.
"""

import asyncio
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from uuid import uuid4

from .errors import ConfirmationError


class ConfirmationAction(str, Enum):
    DELETE_WORKOUT = "delete_workout"
    DELETE_SET = "delete_set"
    DELETE_CARDIO = "delete_cardio"


@dataclass(frozen=True)
class ConfirmationToken:
    """A pending destructive action awaiting confirmation."""

    token: str
    action: ConfirmationAction
    target_id: int
    prompt: str
    expires_at: datetime

    def to_dict(self) -> dict:
        return {
            "token": self.token,
            "action": self.action.value,
            "target_id": self.target_id,
            "prompt": self.prompt,
            "expires_at": self.expires_at.isoformat(),
        }


class ConfirmationRegistry:
    """Issues and redeems confirmation tokens."""

    def __init__(
        self,
        ttl_seconds: int = 300,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock
        self._pending: dict[str, ConfirmationToken] = {}
        self._lock = asyncio.Lock()

    async def request(
        self, action: ConfirmationAction, target_id: int, prompt: str
    ) -> ConfirmationToken:
        """Issue a token for an action."""
        async with self._lock:
            self._cleanup_expired()
            token = ConfirmationToken(
                token=uuid4().hex,
                action=action,
                target_id=target_id,
                prompt=prompt,
                expires_at=self._clock() + self._ttl,
            )
            self._pending[token.token] = token
            return token

    async def get(self, token: str) -> ConfirmationToken | None:
        """Look up a pending token without consuming it."""
        return self._pending.get(token)

    async def redeem(
        self, token: str, actions: Iterable[ConfirmationAction] | None = None
    ) -> ConfirmationToken:
        """Consume a token; raises ConfirmationError if it cannot be used.

        When ``actions`` is given, a token for any other action is rejected
        and left pending.
        """
        async with self._lock:
            pending = self._pending.get(token)
            if pending is None:
                raise ConfirmationError("Unknown or already used confirmation token")
            if actions is not None and pending.action not in set(actions):
                raise ConfirmationError(f"Token is for {pending.action.value}")
            del self._pending[token]
            if pending.expires_at < self._clock():
                raise ConfirmationError("Confirmation token expired")
            return pending

    async def cancel(self, token: str) -> bool:
        """Drop a token without acting on it."""
        async with self._lock:
            return self._pending.pop(token, None) is not None

    def _cleanup_expired(self):
        """Remove expired tokens."""
        now = self._clock()
        for key in [k for k, t in self._pending.items() if t.expires_at < now]:
            del self._pending[key]
