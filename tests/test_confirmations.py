"""Tests for two-phase confirmation tokens."""

import asyncio
from datetime import datetime, timedelta

import pytest

from wave_lift.services.confirmations import ConfirmationAction, ConfirmationRegistry
from wave_lift.services.errors import ConfirmationError


class FakeClock:
    def __init__(self):
        self.now = datetime(2026, 10, 18, 9, 0)

    def __call__(self):
        return self.now


class TestConfirmationRegistry:
    """Tests for ConfirmationRegistry."""

    def test_request_then_redeem(self):
        registry = ConfirmationRegistry()

        async def scenario():
            token = await registry.request(ConfirmationAction.DELETE_WORKOUT, 4, "Delete?")
            assert await registry.get(token.token) == token
            return token, await registry.redeem(token.token)

        token, redeemed = asyncio.run(scenario())
        assert redeemed == token
        assert redeemed.target_id == 4
        assert redeemed.to_dict()["action"] == "delete_workout"

    def test_single_use(self):
        registry = ConfirmationRegistry()

        async def scenario():
            token = await registry.request(ConfirmationAction.DELETE_SET, 1, "Delete?")
            await registry.redeem(token.token)
            await registry.redeem(token.token)

        with pytest.raises(ConfirmationError):
            asyncio.run(scenario())

    def test_unknown_token(self):
        with pytest.raises(ConfirmationError):
            asyncio.run(ConfirmationRegistry().redeem("nope"))

    def test_expired_token(self):
        clock = FakeClock()
        registry = ConfirmationRegistry(ttl_seconds=60, clock=clock)

        async def scenario():
            token = await registry.request(ConfirmationAction.DELETE_CARDIO, 2, "Delete?")
            clock.now += timedelta(seconds=61)
            await registry.redeem(token.token)

        with pytest.raises(ConfirmationError, match="expired"):
            asyncio.run(scenario())

    def test_wrong_action_stays_pending(self):
        registry = ConfirmationRegistry()

        async def scenario():
            token = await registry.request(ConfirmationAction.DELETE_CARDIO, 2, "Delete?")
            with pytest.raises(ConfirmationError):
                await registry.redeem(token.token, actions=(ConfirmationAction.DELETE_SET,))
            return await registry.redeem(token.token, actions=(ConfirmationAction.DELETE_CARDIO,))

        assert asyncio.run(scenario()).target_id == 2

    def test_cancel(self):
        registry = ConfirmationRegistry()

        async def scenario():
            token = await registry.request(ConfirmationAction.DELETE_SET, 1, "Delete?")
            assert await registry.cancel(token.token)
            assert not await registry.cancel(token.token)
            return await registry.get(token.token)

        assert asyncio.run(scenario()) is None

    def test_expired_tokens_are_cleaned_up(self):
        clock = FakeClock()
        registry = ConfirmationRegistry(ttl_seconds=10, clock=clock)

        async def scenario():
            old = await registry.request(ConfirmationAction.DELETE_SET, 1, "Delete?")
            clock.now += timedelta(seconds=30)
            await registry.request(ConfirmationAction.DELETE_SET, 2, "Delete?")
            return await registry.get(old.token)

        assert asyncio.run(scenario()) is None
