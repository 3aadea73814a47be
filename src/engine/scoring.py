"""
Farkle Engine - Scoring

This module implements the scoring rules for six-dice Farkle. All methods are
stateless class methods that operate on immutable inputs, so the engine is
safe to share between any number of callers.

Scoring Rules:
    - Single 1: 100 points
    - Single 5: 50 points
    - Three 1s: 1,000 points
    - Three of X (2-6): X × 100 points
    - Four / five / six of a kind: three-of-a-kind × 2 / 3 / 4
    - 1-2-3-4-5-6 (Straight): 1,500 points
    - Three pairs: 1,500 points
    - Two triplets: 2,500 points

Straight, three pairs and two triplets need all six dice and take priority
over every other reading of the roll.
"""

from collections import Counter
from typing import Sequence

from src.engine.base import (
    DEFAULT_RULES,
    DiceRoll,
    GameRules,
    ScoringCombination,
    ScoringKind,
)
from src.engine.validators import validate_dice_values, validate_selected_indices


class FarkleScoringEngine:
    """
    Stateless scoring engine for six-dice Farkle.

    All methods are class methods operating on immutable data.
    """

    NUM_DICE = GameRules.TOTAL_DICE

    _KIND_BY_COUNT = {
        3: ScoringKind.THREE_OF_A_KIND,
        4: ScoringKind.FOUR_OF_A_KIND,
        5: ScoringKind.FIVE_OF_A_KIND,
        6: ScoringKind.SIX_OF_A_KIND,
    }

    @classmethod
    def calculate_score(
        cls,
        dice: Sequence[int],
        rules: GameRules = DEFAULT_RULES
    ) -> DiceRoll:
        """
        Calculate the score for a given dice roll.

        Args:
            dice: Dice values to score (1 to 6 dice, each 1-6)
            rules: Point values to score with

        Returns:
            DiceRoll with combinations, totals and hot dice / Farkle flags

        Raises:
            ValueError: If the dice are not a legal roll
        """
        values = validate_dice_values(dice, min_count=1, max_count=cls.NUM_DICE)

        combinations = cls.find_scoring_combinations(values, rules)
        total_points = sum(c.points for c in combinations)
        scoring_indices = tuple(sorted(i for c in combinations for i in c.dice_indices))
        remaining = len(values) - len(scoring_indices)
        is_farkle = total_points == 0
        is_hot_dice = remaining == 0 and not is_farkle

        return DiceRoll(
            values=values,
            combinations=tuple(combinations),
            total_points=total_points,
            scoring_dice_indices=scoring_indices,
            remaining_dice=remaining,
            is_hot_dice=is_hot_dice,
            is_farkle=is_farkle,
            message=cls._describe(total_points, remaining, is_farkle, is_hot_dice),
        )

    @classmethod
    def find_scoring_combinations(
        cls,
        values: tuple[int, ...],
        rules: GameRules = DEFAULT_RULES
    ) -> list[ScoringCombination]:
        """
        Identify every scoring combination in the roll.

        Order of detection matters: whole-roll patterns are checked first and
        end the search, then sets, then leftover single 1s and 5s.
        """
        whole_roll = cls._check_whole_roll(values, rules)
        if whole_roll is not None:
            return [whole_roll]

        combinations, used_indices = cls._check_sets(values, rules)
        combinations.extend(cls._check_singles(values, used_indices, rules))
        return combinations

    @classmethod
    def _check_whole_roll(
        cls,
        values: tuple[int, ...],
        rules: GameRules
    ) -> ScoringCombination | None:
        """
        Check for straight, three pairs and two triplets.

        These are mutually exclusive and only exist with exactly six dice.
        """
        if len(values) != cls.NUM_DICE:
            return None

        counts = Counter(values)
        all_indices = tuple(range(len(values)))
        sorted_values = tuple(sorted(values))

        if sorted_values == (1, 2, 3, 4, 5, 6):
            return ScoringCombination(
                kind=ScoringKind.STRAIGHT,
                dice_values=sorted_values,
                dice_indices=all_indices,
                points=rules.straight_points,
                description="Straight (1-2-3-4-5-6)"
            )

        if len(counts) == 3 and all(c == 2 for c in counts.values()):
            pairs = ", ".join(f"{v}-{v}" for v in sorted(counts))
            return ScoringCombination(
                kind=ScoringKind.THREE_PAIRS,
                dice_values=sorted_values,
                dice_indices=all_indices,
                points=rules.three_pairs_points,
                description=f"Three Pairs ({pairs})"
            )

        if len(counts) == 2 and all(c == 3 for c in counts.values()):
            triplets = " and ".join(f"Three {v}s" for v in sorted(counts))
            return ScoringCombination(
                kind=ScoringKind.TWO_TRIPLETS,
                dice_values=sorted_values,
                dice_indices=all_indices,
                points=rules.two_triplets_points,
                description=f"Two Triplets ({triplets})"
            )

        return None

    @classmethod
    def _check_sets(
        cls,
        values: tuple[int, ...],
        rules: GameRules
    ) -> tuple[list[ScoringCombination], set[int]]:
        """
        Check for three or more of a kind.

        Groups are taken largest first, then highest face first. A group is
        always consumed whole.
        """
        combinations: list[ScoringCombination] = []
        used: set[int] = set()

        groups = sorted(
            Counter(values).items(),
            key=lambda item: (item[1], item[0]),
            reverse=True
        )

        for face_value, count in groups:
            if count < 3:
                continue

            indices = cls._find_indices_for_value(values, face_value, exclude=used)
            used.update(indices)

            combinations.append(ScoringCombination(
                kind=cls._KIND_BY_COUNT[count],
                dice_values=tuple([face_value] * count),
                dice_indices=indices,
                points=rules.multiple_of_a_kind_points(face_value, count),
                description=f"{count}x {face_value}s"
            ))

        return combinations, used

    @classmethod
    def _check_singles(
        cls,
        values: tuple[int, ...],
        used: set[int],
        rules: GameRules
    ) -> list[ScoringCombination]:
        """
        Score each leftover 1 and 5 as its own combination.

        Only 1s and 5s score as singles; 1s are listed before 5s.
        """
        combinations: list[ScoringCombination] = []

        for face_value, kind, points in (
            (1, ScoringKind.SINGLE_ONE, rules.single_one_points),
            (5, ScoringKind.SINGLE_FIVE, rules.single_five_points),
        ):
            for i in cls._find_indices_for_value(values, face_value, exclude=used):
                used.add(i)
                combinations.append(ScoringCombination(
                    kind=kind,
                    dice_values=(face_value,),
                    dice_indices=(i,),
                    points=points,
                    description=kind.value
                ))

        return combinations

    @classmethod
    def _find_indices_for_value(
        cls,
        values: tuple[int, ...],
        target: int,
        exclude: set[int] | None = None
    ) -> tuple[int, ...]:
        """Find every unused index holding the target value."""
        exclude = exclude or set()
        return tuple(
            i for i, v in enumerate(values)
            if v == target and i not in exclude
        )

    @classmethod
    def _describe(
        cls,
        total_points: int,
        remaining: int,
        is_farkle: bool,
        is_hot_dice: bool
    ) -> str:
        if is_farkle:
            return "Farkle! No scoring dice. Turn ends."
        if is_hot_dice:
            return (
                f"Hot Dice! All dice scored {total_points} points. "
                f"Roll all {cls.NUM_DICE} dice again!"
            )
        return f"Scored {total_points} points! {remaining} dice remaining."

    @classmethod
    def has_scoring_dice(
        cls,
        dice: Sequence[int],
        rules: GameRules = DEFAULT_RULES
    ) -> bool:
        """Return True if the roll contains any scoring combination."""
        return not cls.calculate_score(dice, rules).is_farkle

    @classmethod
    def is_farkle(
        cls,
        dice: Sequence[int],
        rules: GameRules = DEFAULT_RULES
    ) -> bool:
        """
        Check if a roll is a Farkle (no scoring dice).

        Args:
            dice: Dice values to check

        Returns:
            True if the roll contains no scoring combinations
        """
        return cls.calculate_score(dice, rules).is_farkle

    @classmethod
    def is_hot_dice(
        cls,
        dice: Sequence[int],
        rules: GameRules = DEFAULT_RULES
    ) -> bool:
        """
        Check if all dice have scored (hot dice).

        Hot dice means the player picks up all six dice and rolls again.
        """
        return cls.calculate_score(dice, rules).is_hot_dice

    @classmethod
    def get_scoring_dice_indices(
        cls,
        dice: Sequence[int],
        rules: GameRules = DEFAULT_RULES
    ) -> tuple[int, ...]:
        """Sorted indices of the dice that scored."""
        return cls.calculate_score(dice, rules).scoring_dice_indices

    @classmethod
    def calculate_remaining_dice(
        cls,
        total_dice: int,
        scoring_dice_count: int,
        rules: GameRules = DEFAULT_RULES
    ) -> int:
        """
        Dice available for the next roll after scoring dice are set aside.

        With hot dice enabled, scoring every die resets the count to six.
        """
        remaining = total_dice - scoring_dice_count
        if remaining == 0 and rules.hot_dice_enabled:
            return cls.NUM_DICE
        return remaining

    @classmethod
    def validate_selection(
        cls,
        dice: Sequence[int],
        selected_indices: Sequence[int] | frozenset[int] | set[int],
        rules: GameRules = DEFAULT_RULES
    ) -> bool:
        """
        Check that a player's selection from a roll is worth points.

        Args:
            dice: The full roll
            selected_indices: Indices the player wants to keep

        Returns:
            True if the selected dice contain at least one scoring combination

        Raises:
            ValueError: If the roll or any index is invalid
        """
        values = validate_dice_values(dice, min_count=1, max_count=cls.NUM_DICE)
        indices = validate_selected_indices(selected_indices, len(values))
        if not indices:
            return False

        selected = tuple(values[i] for i in sorted(indices))
        return cls.has_scoring_dice(selected, rules)


def score(dice_values: Sequence[int], rules: GameRules = DEFAULT_RULES) -> DiceRoll:
    """Score a roll. Shorthand for `FarkleScoringEngine.calculate_score`."""
    return FarkleScoringEngine.calculate_score(dice_values, rules)
