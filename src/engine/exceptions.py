"""
Farkle Engine - Exception Hierarchy

Invalid dice input is reported with ValueError, like every other validator
in the engine. The classes below cover rule violations that depend on turn
or game state.
"""

from __future__ import annotations

__all__ = [
    "FarkleError",
    "InvalidTurnActionError",
    "AITurnRunawayError",
    "GameStateError",
    "NotYourTurnError",
]


class FarkleError(Exception):
    """Base exception for the project."""

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"{self.__class__.__name__}({self.args})"


class InvalidTurnActionError(FarkleError):
    """Raised when a turn action is not legal in the turn's current status."""


class AITurnRunawayError(FarkleError):
    """Raised when an automated turn exceeds the per-turn roll cap."""


class GameStateError(FarkleError):
    """Raised when a game-level action is not allowed right now."""


class NotYourTurnError(GameStateError):
    """Raised when a player acts while another player holds the turn."""
