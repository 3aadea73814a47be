"""
Farkle - Test Configuration and Fixtures

Common fixtures and test data for all test modules.
"""

from collections import deque
from datetime import datetime, timedelta, timezone
from typing import Callable, Iterable, Sequence

import pytest

from src.engine.base import GameRules


class ScriptedDiceSource:
    """Dice source that replays fixed rolls, one array per call."""

    def __init__(self, rolls: Iterable[Sequence[int]]) -> None:
        self._rolls = deque(tuple(roll) for roll in rolls)
        self.requested: list[int] = []

    def __call__(self, count: int) -> tuple[int, ...]:
        self.requested.append(count)
        if not self._rolls:
            raise AssertionError("Dice script exhausted")
        roll = self._rolls.popleft()
        if len(roll) != count:
            raise AssertionError(
                f"Scripted roll {roll} has {len(roll)} dice, {count} requested"
            )
        return roll

    @property
    def exhausted(self) -> bool:
        return not self._rolls


class FakeClock:
    """Manually advanced clock for turn timing."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2025, 10, 5, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def scripted_dice() -> Callable[..., ScriptedDiceSource]:
    """Factory: scripted_dice([(1, 1, 1, 2, 3, 4), (5, 2, 3)])."""
    return ScriptedDiceSource


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def rules() -> GameRules:
    return GameRules()


@pytest.fixture
def quick_rules() -> GameRules:
    """Short game: one good roll wins."""
    return GameRules(winning_score=1000, on_board_minimum=500)


# =============================================================================
# SCORING TEST DATA
# =============================================================================

@pytest.fixture
def scoring_rolls() -> dict[str, tuple[tuple[int, ...], int, str]]:
    """
    Common roll patterns with expected scores.

    Returns:
        Dict mapping name to (dice_values, expected_points, description)
    """
    return {
        # Singles
        "single_one": ((1,), 100, "Single 1"),
        "single_five": ((5,), 50, "Single 5"),
        "two_ones": ((1, 1), 200, "Two 1s"),
        "two_fives": ((5, 5), 100, "Two 5s"),
        "one_and_five": ((1, 5), 150, "One 1 and one 5"),

        # Non-scoring singles
        "single_two": ((2,), 0, "Single 2 (farkle)"),
        "single_six": ((6,), 0, "Single 6 (farkle)"),

        # Sets
        "three_ones": ((1, 1, 1), 1000, "Three 1s"),
        "three_fours": ((4, 4, 4), 400, "Three 4s"),
        "four_fours": ((4, 4, 4, 4), 800, "Four 4s"),
        "five_fours": ((4, 4, 4, 4, 4), 1200, "Five 4s"),
        "six_fours": ((4, 4, 4, 4, 4, 4), 1600, "Six 4s"),

        # Whole-roll patterns
        "straight": ((1, 2, 3, 4, 5, 6), 1500, "Straight"),
        "three_pairs": ((2, 2, 3, 3, 5, 5), 1500, "Three pairs"),
        "two_triplets": ((4, 4, 4, 6, 6, 6), 2500, "Two triplets"),

        # Mixed
        "mixed": ((1, 2, 2, 2, 5, 6), 350, "Three 2s + single 1 + single 5"),
        "farkle_roll": ((2, 3, 4, 6), 0, "Farkle roll"),
    }


@pytest.fixture
def farkle_rolls() -> list[tuple[int, ...]]:
    """Rolls with no scoring dice."""
    return [
        (2,),
        (3,),
        (4,),
        (6,),
        (2, 2, 3),
        (2, 3, 4),
        (3, 4, 6, 6),
        (2, 2, 3, 4, 6, 6),
    ]


@pytest.fixture
def hot_dice_rolls() -> list[tuple[int, ...]]:
    """Rolls where every die scores."""
    return [
        (1, 2, 3, 4, 5, 6),  # Straight
        (1, 1, 1, 5, 5, 5),  # Two triplets
        (1, 1, 1, 1, 5, 5),  # Four 1s + two 5s
        (2, 2, 3, 3, 6, 6),  # Three pairs
        (1, 5),
    ]
