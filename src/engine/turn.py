"""
Farkle Engine - Turn State Machine

A TurnState lives for exactly one player-turn. It records every roll, folds
each scored roll into the turn and into the owning player's PlayerScore, and
ends in exactly one of bank, farkle or abandon.

Transitions:
    ACTIVE -> FARKLED -> COMPLETED
    ACTIVE -> BANKED  -> COMPLETED
    ACTIVE -> ABANDONED

`outcome` keeps FARKLED or BANKED once the turn is COMPLETED. Illegal actions
raise InvalidTurnActionError before any field changes.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Sequence

from src.engine.base import DEFAULT_RULES, DiceRoll, GameRules, TurnStatus
from src.engine.exceptions import InvalidTurnActionError
from src.engine.validators import validate_dice_values, validate_score


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class PlayerScore:
    """
    Scoring state carried by a player across turns.

    Attributes:
        total_score: Banked points
        current_turn_score: Points scored in the active turn, not yet banked
        is_on_board: Whether the player has banked the on-board minimum
    """
    total_score: int = 0
    current_turn_score: int = 0
    is_on_board: bool = False
    rules: GameRules = field(default=DEFAULT_RULES, repr=False)

    def __post_init__(self) -> None:
        validate_score(self.total_score)
        validate_score(self.current_turn_score)
        if self.total_score >= self.rules.on_board_minimum and self.total_score > 0:
            self.is_on_board = True

    def add_to_current_turn_score(self, points: int) -> None:
        self.current_turn_score += validate_score(points)

    def bank_current_turn_score(self) -> int:
        """Fold the turn score into the total. Returns the points banked."""
        banked = self.current_turn_score
        self.total_score += banked
        if not self.is_on_board and self.total_score >= self.rules.on_board_minimum:
            self.is_on_board = True
        self.current_turn_score = 0
        return banked

    def clear_current_turn_score(self) -> None:
        """Drop unbanked points (Farkle)."""
        self.current_turn_score = 0

    def has_won(self) -> bool:
        return self.total_score >= self.rules.winning_score


@dataclass
class TurnState:
    """
    Mutable state of one player's turn.

    Attributes:
        player: Score of the player taking the turn (a fresh one under
            `rules` if omitted; must share the turn's rules)
        turn_number: Position of the turn within the game
        status: Current lifecycle status
        outcome: FARKLED or BANKED once the turn has ended
        roll_count: Number of rolls taken this turn
        points_scored: Points accumulated this turn (not yet banked)
        points_banked: Points banked when the turn ended
        dice_remaining: Dice available for the next roll
        roll_history: Every rolled array in order, for replay
    """
    player: PlayerScore | None = None
    rules: GameRules = field(default=DEFAULT_RULES, repr=False)
    turn_number: int = 1
    status: TurnStatus = TurnStatus.ACTIVE
    outcome: TurnStatus | None = None
    roll_count: int = 0
    points_scored: int = 0
    points_banked: int = 0
    dice_remaining: int = GameRules.TOTAL_DICE
    roll_history: list[tuple[int, ...]] = field(default_factory=list)
    started_at: datetime | None = None
    ended_at: datetime | None = None
    clock: Callable[[], datetime] = field(default=_utcnow, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.player is None:
            self.player = PlayerScore(rules=self.rules)
        elif self.player.rules != self.rules:
            raise ValueError("Player score and turn must use the same game rules.")
        if self.started_at is None:
            self.started_at = self.clock()
        if not 0 <= self.dice_remaining <= GameRules.TOTAL_DICE:
            raise ValueError(
                f"Dice remaining must be between 0 and {GameRules.TOTAL_DICE}, "
                f"got {self.dice_remaining}."
            )

    @property
    def is_active(self) -> bool:
        return self.status is TurnStatus.ACTIVE

    @property
    def duration_seconds(self) -> int | None:
        """Whole seconds from start to end, or None while the clock runs."""
        if self.ended_at is None:
            return None
        return int((self.ended_at - self.started_at).total_seconds())

    def _require_active(self, action: str) -> None:
        if not self.is_active:
            raise InvalidTurnActionError(
                f"Cannot {action}: turn is {self.status.value}."
            )

    def record_roll(self, values: Sequence[int]) -> tuple[int, ...]:
        """Append a roll to the history and count it."""
        self._require_active("roll")
        rolled = validate_dice_values(values, min_count=1, max_count=GameRules.TOTAL_DICE)
        self.roll_history.append(rolled)
        self.roll_count += 1
        return rolled

    def apply_scoring_result(self, roll: DiceRoll) -> None:
        """
        Fold a scored roll into the turn.

        A Farkle ends the turn and clears the player's unbanked points.
        Otherwise the points are added and the dice for the next roll are
        set, resetting to six on hot dice.
        """
        self._require_active("apply a roll")

        if roll.is_farkle:
            self.farkle()
            return

        self.points_scored += roll.total_points
        self.player.add_to_current_turn_score(roll.total_points)

        if roll.is_hot_dice and self.rules.hot_dice_enabled:
            self.dice_remaining = GameRules.TOTAL_DICE
        else:
            self.dice_remaining = roll.remaining_dice

    def bank(self) -> int:
        """
        Bank the turn's points into the player's total.

        Returns:
            Points banked

        Raises:
            InvalidTurnActionError: If the turn has ended or scored nothing
        """
        self._require_active("bank")
        if self.points_scored <= 0:
            raise InvalidTurnActionError("No points to bank. Roll dice first.")

        self.points_banked = self.points_scored
        self.player.bank_current_turn_score()
        self.status = TurnStatus.BANKED
        self._finish()
        return self.points_banked

    def farkle(self) -> None:
        """End the turn with nothing banked."""
        self._require_active("farkle")
        self.points_scored = 0
        self.points_banked = 0
        self.player.clear_current_turn_score()
        self.status = TurnStatus.FARKLED
        self._finish()

    def abandon(self) -> None:
        """End the turn because the game was abandoned."""
        self._require_active("abandon")
        self.player.clear_current_turn_score()
        self.status = TurnStatus.ABANDONED
        self.outcome = TurnStatus.ABANDONED
        self.ended_at = self.clock()

    def _finish(self) -> None:
        """Record the outcome, mark the turn completed and stop the clock."""
        self.outcome = self.status
        self.status = TurnStatus.COMPLETED
        self.ended_at = self.clock()

    def snapshot(self) -> dict[str, Any]:
        """JSON-ready view of the turn for callers and persistence."""
        return {
            "turn_number": self.turn_number,
            "status": self.status.value,
            "outcome": self.outcome.value if self.outcome else None,
            "roll_count": self.roll_count,
            "points_scored": self.points_scored,
            "points_banked": self.points_banked,
            "dice_remaining": self.dice_remaining,
            "roll_history": [list(roll) for roll in self.roll_history],
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "ended_at": self.ended_at.isoformat() if self.ended_at else None,
            "duration_seconds": self.duration_seconds,
        }
