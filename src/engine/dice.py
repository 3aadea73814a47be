"""
Farkle Engine - Dice Sources

A dice source is any callable that takes a dice count and returns that many
face values in [1, 6]. The engine never owns a random generator; callers
inject a source so tests can script exact rolls.
"""

import random
from typing import Callable, Sequence

from src.engine.validators import MAX_DICE, validate_dice_count, validate_dice_values

DiceSource = Callable[[int], Sequence[int]]


class RandomDiceSource:
    """Uniform D6 source backed by its own `random.Random` instance."""

    def __init__(self, seed: int | None = None, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random(seed)

    def __call__(self, count: int) -> tuple[int, ...]:
        return tuple(self._rng.randint(1, 6) for _ in range(count))


def roll_dice(source: DiceSource, count: int, max_count: int = MAX_DICE) -> tuple[int, ...]:
    """
    Roll `count` dice from `source`.

    The count is checked before the source is called, and the source's
    output is checked before it reaches the scoring engine.

    Raises:
        ValueError: If the count is illegal or the source misbehaves
    """
    validate_dice_count(count, max_count)
    return validate_dice_values(source(count), min_count=count, max_count=count)
