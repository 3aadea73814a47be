"""
Farkle Engine - Two-Player Game

FarkleGame is the in-memory orchestrator around the engine. It owns the
players, enforces turn order, creates one TurnState per player-turn and
hands the turn over after every bank or Farkle. It is the only place that
checks who is allowed to act.
"""

from __future__ import annotations

import logging
import secrets
import string
from dataclasses import dataclass, field
from typing import Any
from uuid import uuid4

from src.engine.ai import AIPlayer, AITurnResult
from src.engine.base import (
    DEFAULT_RULES,
    AIDifficulty,
    DiceRoll,
    GameRules,
    GameStatus,
)
from src.engine.dice import DiceSource, RandomDiceSource, roll_dice
from src.engine.exceptions import GameStateError, InvalidTurnActionError, NotYourTurnError
from src.engine.scoring import FarkleScoringEngine
from src.engine.turn import PlayerScore, TurnState
from src.engine.validators import validate_dice_count, validate_player_name

logger = logging.getLogger(__name__)

GAME_CODE_LENGTH = 6


def generate_game_code(length: int = GAME_CODE_LENGTH) -> str:
    """Generate an alphanumeric join code, avoiding ambiguous characters."""
    alphabet = string.ascii_uppercase.replace("O", "").replace("I", "")
    alphabet += string.digits.replace("0", "").replace("1", "")
    return "".join(secrets.choice(alphabet) for _ in range(length))


@dataclass
class GamePlayer:
    """A seat at the table."""

    name: str
    turn_order: int
    is_ai: bool = False
    ai_difficulty: AIDifficulty = AIDifficulty.MEDIUM
    player_id: str = field(default_factory=lambda: str(uuid4()))
    score: PlayerScore = field(default_factory=PlayerScore)
    is_current_turn: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "player_id": self.player_id,
            "name": self.name,
            "turn_order": self.turn_order,
            "total_score": self.score.total_score,
            "current_turn_score": self.score.current_turn_score,
            "is_on_board": self.score.is_on_board,
            "is_current_turn": self.is_current_turn,
            "is_ai": self.is_ai,
            "ai_difficulty": self.ai_difficulty.name.lower() if self.is_ai else None,
        }


@dataclass(frozen=True)
class RollOutcome:
    """What a human roll did to the turn."""

    roll: DiceRoll
    current_turn_score: int
    total_score: int
    dice_available: int
    turn_ended: bool

    @property
    def can_continue(self) -> bool:
        return not self.turn_ended and self.dice_available > 0


@dataclass(frozen=True)
class BankOutcome:
    """Result of banking a turn."""

    points_banked: int
    new_total_score: int
    is_on_board: bool
    has_won: bool
    next_player_id: str | None


class FarkleGame:
    """
    Two-player Farkle game.

    Args:
        rules: Rule constants shared by every turn
        dice_source: Where rolls come from; shared by human and AI turns
        code: Join code (generated if omitted)
        default_ai_difficulty: Difficulty for AI seats added without one
    """

    def __init__(
        self,
        rules: GameRules = DEFAULT_RULES,
        dice_source: DiceSource | None = None,
        code: str | None = None,
        default_ai_difficulty: AIDifficulty = AIDifficulty.MEDIUM,
    ) -> None:
        self.rules = rules
        self.default_ai_difficulty = default_ai_difficulty
        self.dice_source = dice_source if dice_source is not None else RandomDiceSource()
        self.game_id = str(uuid4())
        self.code = code or generate_game_code()
        self.status = GameStatus.WAITING_FOR_PLAYERS
        self.players: list[GamePlayer] = []
        self.current_player_index = 0
        self.current_turn: TurnState | None = None
        self.turns: list[TurnState] = []
        self.winner_id: str | None = None

    @classmethod
    def from_settings(cls, settings, dice_source: DiceSource | None = None) -> "FarkleGame":
        """Build a game from application settings (rules and default AI difficulty)."""
        return cls(
            rules=settings.game_rules(),
            dice_source=dice_source,
            default_ai_difficulty=settings.ai_difficulty,
        )

    # -- Seating ---------------------------------------------------------

    def is_full(self) -> bool:
        return len(self.players) >= GameRules.MAX_PLAYERS

    def can_accept_players(self) -> bool:
        return self.status is GameStatus.WAITING_FOR_PLAYERS and not self.is_full()

    def add_player(
        self,
        name: str,
        *,
        is_ai: bool = False,
        ai_difficulty: AIDifficulty | None = None,
    ) -> GamePlayer:
        """Seat a player in the next turn-order slot."""
        if not self.can_accept_players():
            raise GameStateError("Game is full or already started.")

        player = GamePlayer(
            name=validate_player_name(name),
            turn_order=len(self.players) + 1,
            is_ai=is_ai,
            ai_difficulty=(
                self.default_ai_difficulty if ai_difficulty is None else ai_difficulty
            ),
            score=PlayerScore(rules=self.rules),
        )
        self.players.append(player)
        return player

    def start(self) -> None:
        """Start play once both seats are filled; seat one goes first."""
        if self.status is not GameStatus.WAITING_FOR_PLAYERS:
            raise GameStateError(f"Cannot start a game that is {self.status.value}.")
        if len(self.players) != GameRules.MAX_PLAYERS:
            raise GameStateError(f"Cannot start game without {GameRules.MAX_PLAYERS} players.")

        self.status = GameStatus.IN_PROGRESS
        self.current_player_index = 0
        self.players[0].is_current_turn = True
        logger.info(
            "Game %s started: %s vs %s",
            self.code, self.players[0].name, self.players[1].name,
        )

    # -- Lookup ----------------------------------------------------------

    @property
    def current_player(self) -> GamePlayer | None:
        if self.status is not GameStatus.IN_PROGRESS:
            return None
        return self.players[self.current_player_index]

    @property
    def is_ai_turn(self) -> bool:
        player = self.current_player
        return player is not None and player.is_ai

    def get_player(self, player_id: str) -> GamePlayer:
        for player in self.players:
            if player.player_id == player_id:
                return player
        raise GameStateError("Player not found in this game.")

    def opponent_of(self, player_id: str) -> GamePlayer | None:
        for player in self.players:
            if player.player_id != player_id:
                return player
        return None

    def can_player_act(self, player_id: str) -> bool:
        player = self.current_player
        return player is not None and player.player_id == player_id

    # -- Turn actions ----------------------------------------------------

    def _require_turn(self, player_id: str) -> GamePlayer:
        if self.status is not GameStatus.IN_PROGRESS:
            raise GameStateError("Game is not in progress.")
        player = self.get_player(player_id)
        if not player.is_current_turn:
            raise NotYourTurnError("It's not your turn.")
        return player

    def _active_turn(self, player: GamePlayer) -> TurnState:
        if self.current_turn is None or not self.current_turn.is_active:
            self.current_turn = TurnState(
                player=player.score,
                rules=self.rules,
                turn_number=len(self.turns) + 1,
            )
            self.turns.append(self.current_turn)
        return self.current_turn

    def roll(self, player_id: str, dice_count: int | None = None) -> RollOutcome:
        """
        Roll for the current player.

        Args:
            player_id: The acting player
            dice_count: Explicit number of dice, or the turn's dice remaining

        Raises:
            NotYourTurnError: If another player holds the turn
            GameStateError: If the game is not in progress
            ValueError: If the dice count is illegal
        """
        player = self._require_turn(player_id)
        if dice_count is not None:
            validate_dice_count(dice_count, GameRules.TOTAL_DICE)
        turn = self._active_turn(player)

        if dice_count is None:
            if turn.dice_remaining == 0:
                raise InvalidTurnActionError("No dice remaining. Bank your points.")
            dice_count = turn.dice_remaining

        values = roll_dice(self.dice_source, dice_count)
        turn.record_roll(values)
        roll = FarkleScoringEngine.calculate_score(values, self.rules)
        turn.apply_scoring_result(roll)

        if roll.is_farkle:
            logger.info("%s farkled on roll %d", player.name, turn.roll_count)
            self._pass_turn()
            return RollOutcome(
                roll=roll,
                current_turn_score=0,
                total_score=player.score.total_score,
                dice_available=0,
                turn_ended=True,
            )

        return RollOutcome(
            roll=roll,
            current_turn_score=player.score.current_turn_score,
            total_score=player.score.total_score,
            dice_available=turn.dice_remaining,
            turn_ended=False,
        )

    def bank(self, player_id: str) -> BankOutcome:
        """
        Bank the current player's turn score.

        Raises:
            NotYourTurnError: If another player holds the turn
            InvalidTurnActionError: If there is nothing to bank
        """
        player = self._require_turn(player_id)
        if self.current_turn is None or not self.current_turn.is_active:
            raise InvalidTurnActionError("No points to bank. Roll dice first.")

        points = self.current_turn.bank()
        logger.info(
            "%s banked %d points (total %d)",
            player.name, points, player.score.total_score,
        )

        has_won = self._settle_bank(player)
        next_player = self.current_player
        return BankOutcome(
            points_banked=points,
            new_total_score=player.score.total_score,
            is_on_board=player.score.is_on_board,
            has_won=has_won,
            next_player_id=next_player.player_id if next_player else None,
        )

    def play_ai_turn(self) -> AITurnResult:
        """
        Play out the current player's turn with the AI policy.

        Raises:
            GameStateError: If the game is not in progress or the current
                player is not flagged as AI
        """
        player = self.current_player
        if player is None:
            raise GameStateError("Game is not in progress.")
        if not player.is_ai:
            raise GameStateError("Player is not an AI player.")

        opponent = self.opponent_of(player.player_id)
        opponent_total = opponent.score.total_score if opponent else 0
        ai = AIPlayer(
            difficulty=player.ai_difficulty,
            dice_source=self.dice_source,
            rules=self.rules,
        )

        turn = self._active_turn(player)
        result = ai.play_turn(turn, opponent_total)

        if result.farkled:
            self._pass_turn()
        else:
            result.game_won = self._settle_bank(player)
        logger.info("%s: %s", player.name, result.summary)
        return result

    def abandon(self) -> None:
        """Abandon the game, ending any turn in progress."""
        if self.status in (GameStatus.COMPLETED, GameStatus.ABANDONED):
            raise GameStateError(f"Game is already {self.status.value}.")
        if self.current_turn is not None and self.current_turn.is_active:
            self.current_turn.abandon()
        self.status = GameStatus.ABANDONED
        for player in self.players:
            player.is_current_turn = False
        logger.info("Game %s abandoned", self.code)

    # -- Internals -------------------------------------------------------

    def _settle_bank(self, player: GamePlayer) -> bool:
        """End the game if the bank won it, otherwise pass the turn."""
        if player.score.has_won():
            self._end_game(player)
            return True
        self._pass_turn()
        return False

    def _pass_turn(self) -> None:
        self.players[self.current_player_index].is_current_turn = False
        self.current_player_index = (self.current_player_index + 1) % len(self.players)
        self.players[self.current_player_index].is_current_turn = True
        self.current_turn = None

    def _end_game(self, winner: GamePlayer) -> None:
        self.status = GameStatus.COMPLETED
        self.winner_id = winner.player_id
        self.current_turn = None
        for player in self.players:
            player.is_current_turn = False
        logger.info(
            "Game %s won by %s with %d points",
            self.code, winner.name, winner.score.total_score,
        )

    def state(self) -> dict[str, Any]:
        """Plain-dict snapshot for transport layers."""
        current = self.current_player
        return {
            "game_id": self.game_id,
            "code": self.code,
            "status": self.status.value,
            "winning_score": self.rules.winning_score,
            "current_player_id": current.player_id if current else None,
            "winner_id": self.winner_id,
            "players": [p.to_dict() for p in self.players],
            "current_turn": self.current_turn.snapshot() if self.current_turn else None,
        }
