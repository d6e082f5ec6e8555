"""Pytest configuration and fixtures."""

import asyncio
import tempfile
from pathlib import Path

import pytest

from wave_lift.config import Settings
from wave_lift.db import init_db, seed_exercises
from wave_lift.models.cycle import CyclePosition, DayType


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
def db_path(temp_db_path):
    """An initialized database with the default exercise library."""

    async def setup():
        await init_db(temp_db_path)
        await seed_exercises(temp_db_path)

    asyncio.run(setup())
    return temp_db_path


@pytest.fixture
def settings(temp_db_path):
    """Settings that write baselines through immediately."""
    return Settings(data_dir=temp_db_path.parent, debounce_ms=0)


@pytest.fixture
def level_up_day():
    """Week 5 Heavy day, where progression fires."""
    return CyclePosition(week=5, day_type=DayType.HEAVY, cycle_number=1)
