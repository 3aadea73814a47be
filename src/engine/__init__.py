"""
Farkle Game Engine.

Pure Python game logic with zero UI/database dependencies.
Handles dice rolling, scoring, Farkle detection, hot dice and the AI opponent.
"""

from src.engine.ai import AIDecisionContext, AIPlayer, AITurnResult, decide
from src.engine.base import (
    DEFAULT_RULES,
    AIDifficulty,
    DiceRoll,
    GameRules,
    GameStatus,
    ScoringCombination,
    ScoringKind,
    TurnDecision,
    TurnStatus,
)
from src.engine.dice import DiceSource, RandomDiceSource, roll_dice
from src.engine.exceptions import (
    AITurnRunawayError,
    FarkleError,
    GameStateError,
    InvalidTurnActionError,
    NotYourTurnError,
)
from src.engine.game import BankOutcome, FarkleGame, GamePlayer, RollOutcome
from src.engine.scoring import FarkleScoringEngine, score
from src.engine.turn import PlayerScore, TurnState

__all__ = [
    # Data Classes
    "DiceRoll",
    "ScoringCombination",
    "GameRules",
    "DEFAULT_RULES",
    "PlayerScore",
    "TurnState",
    "AIDecisionContext",
    "AITurnResult",
    "RollOutcome",
    "BankOutcome",
    "GamePlayer",
    # Enums
    "AIDifficulty",
    "GameStatus",
    "ScoringKind",
    "TurnDecision",
    "TurnStatus",
    # Dice
    "DiceSource",
    "RandomDiceSource",
    "roll_dice",
    # Engines
    "FarkleScoringEngine",
    "score",
    "decide",
    "AIPlayer",
    "FarkleGame",
    # Errors
    "FarkleError",
    "InvalidTurnActionError",
    "AITurnRunawayError",
    "GameStateError",
    "NotYourTurnError",
]
