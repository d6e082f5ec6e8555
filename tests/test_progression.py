"""Tests for automatic load progression."""

import threading

import pytest

from wave_lift.engine.cycle_clock import targets_for
from wave_lift.engine.errors import InvalidState
from wave_lift.engine.progression import (
    LevelUp,
    ProgressionEngine,
    check_level_up,
    count_successful,
    is_level_up_eligible,
    is_level_up_window,
    next_prescribed_weight,
)
from wave_lift.engine.set_evaluator import evaluate
from wave_lift.models.cycle import CyclePosition, DayType
from wave_lift.models.workout import Outcome

C, E, I = Outcome.COMPLETE, Outcome.EXCEEDED, Outcome.INCOMPLETE


class TestWindow:
    """Tests for the level-up window."""

    def test_only_week_five_heavy(self):
        for week in range(1, 6):
            for day in DayType:
                expected = week == 5 and day == DayType.HEAVY
                assert is_level_up_window(CyclePosition(week=week, day_type=day)) == expected

    def test_invalid_position_raises(self):
        with pytest.raises(InvalidState):
            is_level_up_window(CyclePosition(week=9, day_type=DayType.HEAVY))


class TestStatelessCheck:
    """Tests for the module-level rule."""

    @pytest.mark.parametrize(
        "outcomes,fires",
        [
            ([], False),
            ([C], False),
            ([E], False),
            ([C, I], False),
            ([I, I, I], False),
            ([C, C], True),
            ([C, E], True),
            ([E, E], True),
            ([I, C, E], True),
            (["Complete", "Exceeded"], True),
        ],
    )
    def test_fires_iff_two_successful(self, outcomes, fires):
        assert (check_level_up(1, outcomes, 100) is not None) == fires
        assert is_level_up_eligible(outcomes) == fires

    def test_new_weight_is_ten_percent_rounded(self):
        assert check_level_up(1, [C, C], 100) == 110.0
        assert next_prescribed_weight(57.5) == 63.25
        assert next_prescribed_weight(62.5) == 68.75
        assert next_prescribed_weight(33) == 36.25

    def test_missing_baseline_levels_to_zero(self):
        assert check_level_up(1, [C, C], None) == 0.0

    def test_already_leveled_is_skipped(self):
        assert check_level_up(1, [C, C], 100, already_leveled={1}) is None
        assert check_level_up(2, [C, C], 100, already_leveled={1}) == 110.0

    def test_count_successful(self):
        assert count_successful([C, E, I, C]) == 3


class TestProgressionEngine:
    """Tests for the per-session engine."""

    def test_level_up_scenario(self, level_up_day):
        target = targets_for(level_up_day, 100)
        assert (target.target_weight, target.target_reps) == (100.0, 2)

        outcomes = [
            evaluate(100, 2, target.target_weight, target.target_reps),
            evaluate(101, 2, target.target_weight, target.target_reps),
        ]
        assert outcomes == [Outcome.COMPLETE, Outcome.EXCEEDED]

        engine = ProgressionEngine(level_up_day)
        assert engine.check_level_up(7, outcomes, 100) == LevelUp(
            exercise_id=7, previous_weight=100.0, new_weight=110.0
        )

    def test_fires_once_with_growing_outcomes(self, level_up_day):
        engine = ProgressionEngine(level_up_day)
        outcomes = [C, E]
        fired = []
        for extra in (None, C, E, C):
            if extra is not None:
                outcomes.append(extra)
            fired.append(engine.check_level_up(1, outcomes, 100))
        assert fired[0] is not None
        assert fired[1:] == [None, None, None]
        assert engine.has_leveled(1)

    def test_exercises_are_independent(self, level_up_day):
        engine = ProgressionEngine(level_up_day)
        assert engine.check_level_up(1, [C, C], 100) is not None
        assert engine.check_level_up(2, [C, C], 50) is not None

    def test_never_fires_outside_window(self):
        for day in DayType:
            for week in range(1, 6):
                position = CyclePosition(week=week, day_type=day)
                if is_level_up_window(position):
                    continue
                engine = ProgressionEngine(position)
                assert engine.check_level_up(1, [E, E], 100) is None

    def test_preloaded_flags(self, level_up_day):
        engine = ProgressionEngine(level_up_day, leveled=[3])
        assert engine.check_level_up(3, [C, C], 100) is None

        engine.mark_leveled(4)
        assert engine.check_level_up(4, [C, C], 100) is None

    def test_eligibility_ignores_flag(self, level_up_day):
        engine = ProgressionEngine(level_up_day, leveled=[1])
        assert engine.is_level_up_eligible(1, [C, C])
        assert not engine.is_level_up_eligible(1, [C, I])

    def test_concurrent_checks_fire_once(self, level_up_day):
        engine = ProgressionEngine(level_up_day)
        results = []
        barrier = threading.Barrier(8)

        def worker():
            barrier.wait()
            results.append(engine.check_level_up(1, [C, E], 100))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sum(1 for r in results if r is not None) == 1
