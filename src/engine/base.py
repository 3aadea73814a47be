"""
Farkle Engine - Base Classes

This module defines the foundational data structures and enums used throughout
the game engine. Value objects are frozen dataclasses so a scored roll can be
handed to any number of callers without copying.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar


class ScoringKind(Enum):
    """Kinds of scoring combinations."""
    SINGLE_ONE = "Single 1"
    SINGLE_FIVE = "Single 5"
    THREE_OF_A_KIND = "Three of a Kind"
    FOUR_OF_A_KIND = "Four of a Kind"
    FIVE_OF_A_KIND = "Five of a Kind"
    SIX_OF_A_KIND = "Six of a Kind"
    STRAIGHT = "Straight"          # 1-2-3-4-5-6
    THREE_PAIRS = "Three Pairs"
    TWO_TRIPLETS = "Two Triplets"

    @property
    def is_whole_roll(self) -> bool:
        """Whole-roll kinds need exactly six dice and consume all of them."""
        return self in _WHOLE_ROLL_KINDS


_WHOLE_ROLL_KINDS = frozenset({
    ScoringKind.STRAIGHT,
    ScoringKind.THREE_PAIRS,
    ScoringKind.TWO_TRIPLETS,
})


class TurnStatus(Enum):
    """Lifecycle of a single player-turn."""
    ACTIVE = "active"
    FARKLED = "farkled"
    BANKED = "banked"
    COMPLETED = "completed"
    ABANDONED = "abandoned"

    @property
    def is_terminal(self) -> bool:
        return self is not TurnStatus.ACTIVE


class GameStatus(Enum):
    """Lifecycle of a two-player game."""
    WAITING_FOR_PLAYERS = "waiting"
    IN_PROGRESS = "playing"
    COMPLETED = "finished"
    ABANDONED = "abandoned"


class AIDifficulty(Enum):
    """AI opponent difficulty tiers."""
    EASY = 0    # Banks early, conservative play
    MEDIUM = 1  # Balanced risk-taking
    HARD = 2    # Aggressive, plays the scoreboard

    @classmethod
    def from_name(cls, name: str) -> "AIDifficulty":
        """Look up a difficulty by case-insensitive name."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            valid = ", ".join(d.name.lower() for d in cls)
            raise ValueError(
                f"Unknown AI difficulty {name!r}. Must be one of: {valid}."
            ) from None


class TurnDecision(Enum):
    """What a player does after a scoring roll."""
    BANK = "bank"
    CONTINUE = "continue"


@dataclass(frozen=True)
class GameRules:
    """
    Rule constants the engine depends on.

    Attributes:
        winning_score: Banked total that wins the game
        on_board_minimum: Turn score needed before a player's first bank counts
        hot_dice_enabled: Whether scoring every die resets the roll to six dice
        max_ai_rolls_per_turn: Roll cap for one automated turn
    """
    TOTAL_DICE: ClassVar[int] = 6
    MAX_PLAYERS: ClassVar[int] = 2

    winning_score: int = 5000
    on_board_minimum: int = 500
    hot_dice_enabled: bool = True
    max_ai_rolls_per_turn: int = 50

    # Scoring values
    single_one_points: int = 100
    single_five_points: int = 50
    three_ones_points: int = 1000
    three_of_a_kind_multiplier: int = 100
    four_of_a_kind_multiplier: int = 2
    five_of_a_kind_multiplier: int = 3
    six_of_a_kind_multiplier: int = 4
    straight_points: int = 1500
    three_pairs_points: int = 1500
    two_triplets_points: int = 2500

    def __post_init__(self) -> None:
        """Validate rule values."""
        if self.winning_score <= 0:
            raise ValueError(f"Winning score must be positive, got {self.winning_score}.")
        if not 0 <= self.on_board_minimum < self.winning_score:
            raise ValueError(
                f"On-board minimum must be between 0 and the winning score, "
                f"got {self.on_board_minimum}."
            )
        if self.max_ai_rolls_per_turn < 1:
            raise ValueError(
                f"AI roll cap must be at least 1, got {self.max_ai_rolls_per_turn}."
            )

    def three_of_a_kind_points(self, face_value: int) -> int:
        """Base points for three dice showing `face_value`."""
        if face_value == 1:
            return self.three_ones_points
        return face_value * self.three_of_a_kind_multiplier

    def multiple_of_a_kind_points(self, face_value: int, count: int) -> int:
        """Points for three to six dice of the same face."""
        base_points = self.three_of_a_kind_points(face_value)
        multipliers = {
            3: 1,
            4: self.four_of_a_kind_multiplier,
            5: self.five_of_a_kind_multiplier,
            6: self.six_of_a_kind_multiplier,
        }
        return base_points * multipliers.get(count, 0)


DEFAULT_RULES = GameRules()


@dataclass(frozen=True)
class ScoringCombination:
    """
    A single scoring component within a roll.

    Attributes:
        kind: The type of scoring combination
        dice_values: The dice that contributed to this score
        dice_indices: Positions of those dice in the rolled array
        points: Points awarded for this combination
        description: Human-readable description
    """
    kind: ScoringKind
    dice_values: tuple[int, ...]
    dice_indices: tuple[int, ...]
    points: int
    description: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.kind.value,
            "description": self.description,
            "dice_values": list(self.dice_values),
            "dice_indices": list(self.dice_indices),
            "points": self.points,
        }


@dataclass(frozen=True)
class DiceRoll:
    """
    Scored result of one roll.

    Attributes:
        values: Rolled face values, in roll order
        combinations: Scoring combinations found in the roll
        total_points: Sum of all combination points
        scoring_dice_indices: Sorted positions of dice that scored
        remaining_dice: Dice that did not score
        is_hot_dice: Every rolled die scored
        is_farkle: Nothing scored
        message: Human-readable outcome for presentation layers
    """
    values: tuple[int, ...]
    combinations: tuple[ScoringCombination, ...] = field(default_factory=tuple)
    total_points: int = 0
    scoring_dice_indices: tuple[int, ...] = field(default_factory=tuple)
    remaining_dice: int = 0
    is_hot_dice: bool = False
    is_farkle: bool = True
    message: str = ""

    def __post_init__(self) -> None:
        """Validate dice values are within valid range."""
        for value in self.values:
            if not (1 <= value <= 6):
                raise ValueError(
                    f"Invalid die value {value}. Must be between 1 and 6."
                )

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, index: int) -> int:
        return self.values[index]

    def __str__(self) -> str:
        if self.is_farkle:
            return "FARKLE! No scoring dice."
        lines = [f"Total: {self.total_points} points"]
        for item in self.combinations:
            lines.append(f"  - {item.description}: {item.points}")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation."""
        return {
            "dice_values": list(self.values),
            "scoring_combinations": [c.to_dict() for c in self.combinations],
            "total_points": self.total_points,
            "scoring_dice_indices": list(self.scoring_dice_indices),
            "remaining_dice": self.remaining_dice,
            "is_hot_dice": self.is_hot_dice,
            "is_farkle": self.is_farkle,
            "message": self.message,
        }
