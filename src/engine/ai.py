"""
Farkle Engine - AI Opponent

`decide` is a pure function of an AIDecisionContext: it answers bank or
continue after a scoring roll. AIPlayer drives a whole automated turn by
rolling, scoring and asking the policy until the turn banks or Farkles.

Difficulty ladders (first match wins), after the on-board override:

    Easy    bank at 300, with two dice or fewer, or at 200 when behind.
    Medium  bank at 500, with one die, at 350 on two dice, at 700 when far
            behind, at 400 when ahead, or at 300 close to winning.
    Hard    bank at 800, at 200 on one die, at 1000/700/600 depending on
            the gap, whenever the bank wins, or near the finish line.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from src.engine.base import (
    DEFAULT_RULES,
    AIDifficulty,
    DiceRoll,
    GameRules,
    TurnDecision,
    TurnStatus,
)
from src.engine.dice import DiceSource, RandomDiceSource, roll_dice
from src.engine.exceptions import AITurnRunawayError, InvalidTurnActionError
from src.engine.scoring import FarkleScoringEngine
from src.engine.turn import TurnState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AIDecisionContext:
    """Everything the policy may look at when deciding."""

    current_turn_score: int
    total_score: int
    opponent_total_score: int
    dice_remaining: int
    difficulty: AIDifficulty = AIDifficulty.MEDIUM

    @property
    def projected_total(self) -> int:
        """Total score if the turn were banked now."""
        return self.total_score + self.current_turn_score

    @property
    def is_behind(self) -> bool:
        return self.opponent_total_score > self.total_score

    @property
    def is_ahead(self) -> bool:
        return self.opponent_total_score < self.total_score

    @property
    def deficit(self) -> int:
        """How far the opponent is ahead (negative when we lead)."""
        return self.opponent_total_score - self.total_score


DecisionPolicy = Callable[[AIDecisionContext, GameRules], TurnDecision]


def _should_bank_easy(ctx: AIDecisionContext, rules: GameRules) -> bool:
    if ctx.current_turn_score >= 300:
        return True
    if ctx.dice_remaining <= 2:
        return True
    if ctx.current_turn_score >= 200 and ctx.is_behind:
        return True
    return False


def _should_bank_medium(ctx: AIDecisionContext, rules: GameRules) -> bool:
    turn_score = ctx.current_turn_score

    if turn_score >= 500:
        return True
    if ctx.dice_remaining == 1:
        return True
    if turn_score >= 350 and ctx.dice_remaining == 2:
        return True

    if ctx.deficit > 2000:
        if turn_score >= 700:
            return True
    elif ctx.is_ahead:
        if turn_score >= 400:
            return True

    if ctx.projected_total >= rules.winning_score - 500 and turn_score >= 300:
        return True
    return False


def _should_bank_hard(ctx: AIDecisionContext, rules: GameRules) -> bool:
    turn_score = ctx.current_turn_score

    if turn_score >= 800:
        return True
    if ctx.dice_remaining == 1 and turn_score >= 200:
        return True

    if ctx.deficit > 3000:
        if turn_score >= 1000:
            return True
    elif ctx.deficit > 1000:
        if turn_score >= 700:
            return True
    elif ctx.is_ahead:
        if turn_score >= 600:
            return True

    if ctx.projected_total >= rules.winning_score:
        return True
    if ctx.projected_total >= rules.winning_score - 1000:
        if turn_score >= 400 or ctx.dice_remaining <= 2:
            return True
    return False


_LADDERS: dict[AIDifficulty, Callable[[AIDecisionContext, GameRules], bool]] = {
    AIDifficulty.EASY: _should_bank_easy,
    AIDifficulty.MEDIUM: _should_bank_medium,
    AIDifficulty.HARD: _should_bank_hard,
}


def decide(ctx: AIDecisionContext, rules: GameRules = DEFAULT_RULES) -> TurnDecision:
    """
    Decide whether to bank or keep rolling.

    A player with nothing banked keeps rolling until the turn reaches the
    on-board minimum, whatever the difficulty.
    """
    if ctx.total_score == 0 and ctx.current_turn_score < rules.on_board_minimum:
        return TurnDecision.CONTINUE

    if _LADDERS[ctx.difficulty](ctx, rules):
        return TurnDecision.BANK
    return TurnDecision.CONTINUE


@dataclass
class AITurnResult:
    """Summary of one automated turn."""

    rolls: list[DiceRoll] = field(default_factory=list)
    roll_count: int = 0
    points_scored: int = 0
    new_total_score: int = 0
    outcome: TurnStatus | None = None
    game_won: bool = False

    @property
    def farkled(self) -> bool:
        return self.outcome is TurnStatus.FARKLED

    @property
    def summary(self) -> str:
        times = f"{self.roll_count} time(s)"
        if self.farkled:
            return f"AI rolled {times} and FARKLED! No points scored."
        if self.game_won:
            return (
                f"AI rolled {times}, banked {self.points_scored} points "
                f"(Total: {self.new_total_score}) and WON THE GAME!"
            )
        return (
            f"AI rolled {times} and banked {self.points_scored} points. "
            f"Total score: {self.new_total_score}"
        )

    def to_dict(self) -> dict:
        return {
            "rolls": [roll.to_dict() for roll in self.rolls],
            "roll_count": self.roll_count,
            "points_scored": self.points_scored,
            "new_total_score": self.new_total_score,
            "farkled": self.farkled,
            "decision": self.outcome.value if self.outcome else None,
            "game_won": self.game_won,
            "summary": self.summary,
        }


class AIPlayer:
    """
    Plays complete Farkle turns for a computer opponent.

    Args:
        difficulty: Which threshold ladder to use
        dice_source: Where rolls come from (a fresh RandomDiceSource if omitted)
        rules: Rule constants, including the per-turn roll cap
        policy: Decision function, `decide` unless overridden
    """

    def __init__(
        self,
        difficulty: AIDifficulty = AIDifficulty.MEDIUM,
        dice_source: DiceSource | None = None,
        rules: GameRules = DEFAULT_RULES,
        policy: DecisionPolicy = decide,
    ) -> None:
        self.difficulty = difficulty
        self.dice_source = dice_source if dice_source is not None else RandomDiceSource()
        self.rules = rules
        self.policy = policy

    def context_for(self, turn: TurnState, opponent_total_score: int) -> AIDecisionContext:
        return AIDecisionContext(
            current_turn_score=turn.player.current_turn_score,
            total_score=turn.player.total_score,
            opponent_total_score=opponent_total_score,
            dice_remaining=turn.dice_remaining,
            difficulty=self.difficulty,
        )

    def should_bank(
        self,
        current_turn_score: int,
        total_score: int,
        opponent_score: int,
        dice_remaining: int,
    ) -> bool:
        """Convenience wrapper around the policy for a bare score line."""
        ctx = AIDecisionContext(
            current_turn_score=current_turn_score,
            total_score=total_score,
            opponent_total_score=opponent_score,
            dice_remaining=dice_remaining,
            difficulty=self.difficulty,
        )
        return self.policy(ctx, self.rules) is TurnDecision.BANK

    def play_turn(self, turn: TurnState, opponent_total_score: int) -> AITurnResult:
        """
        Roll until the policy banks or the dice Farkle.

        Args:
            turn: Active turn owned by the AI player
            opponent_total_score: The opponent's banked total

        Returns:
            AITurnResult describing every roll and the outcome

        Raises:
            InvalidTurnActionError: If the turn is not active
            AITurnRunawayError: If the roll cap is reached without ending
        """
        if not turn.is_active:
            raise InvalidTurnActionError(
                f"Cannot play a turn that is {turn.status.value}."
            )

        result = AITurnResult()
        player = turn.player

        for _ in range(self.rules.max_ai_rolls_per_turn):
            values = roll_dice(self.dice_source, turn.dice_remaining)
            turn.record_roll(values)
            roll = FarkleScoringEngine.calculate_score(values, self.rules)
            turn.apply_scoring_result(roll)

            result.rolls.append(roll)
            result.roll_count += 1
            logger.info("AI rolled %s - points: %d", list(values), roll.total_points)

            if roll.is_farkle:
                result.outcome = TurnStatus.FARKLED
                result.new_total_score = player.total_score
                return result

            if roll.is_hot_dice and self.rules.hot_dice_enabled:
                logger.info("AI got HOT DICE! Rolling all %d again.", turn.dice_remaining)

            if turn.dice_remaining == 0:
                decision = TurnDecision.BANK
            else:
                decision = self.policy(self.context_for(turn, opponent_total_score), self.rules)

            if decision is TurnDecision.BANK:
                result.points_scored = turn.bank()
                result.outcome = TurnStatus.BANKED
                result.new_total_score = player.total_score
                result.game_won = player.has_won()
                return result

        logger.error(
            "AI turn exceeded %d rolls without banking or farkling",
            self.rules.max_ai_rolls_per_turn,
        )
        raise AITurnRunawayError(
            f"AI turn did not finish within {self.rules.max_ai_rolls_per_turn} rolls."
        )
