"""
Farkle - Database Models

Pydantic models that mirror the Supabase table schemas, plus the mapping
between a TurnState and its `turns` row.
"""

import json
from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.engine.base import AIDifficulty, GameRules, TurnStatus
from src.engine.turn import PlayerScore, TurnState


class GameRecord(BaseModel):
    """Mirrors the `games` table."""

    id: UUID
    code: str = Field(max_length=6)
    status: str = "waiting"
    current_player_index: int = 0
    winning_score: int = 5000
    winner_id: UUID | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PlayerRecord(BaseModel):
    """Mirrors the `players` table."""

    id: UUID
    game_id: UUID
    name: str = Field(max_length=50)
    total_score: int = 0
    current_turn_score: int = 0
    is_on_board: bool = False
    turn_order: int
    is_ai: bool = False
    ai_difficulty: int = AIDifficulty.MEDIUM.value
    is_connected: bool = True
    created_at: datetime

    model_config = {"from_attributes": True}

    @property
    def difficulty(self) -> AIDifficulty | None:
        """AI difficulty, or None for human players."""
        return AIDifficulty(self.ai_difficulty) if self.is_ai else None

    def to_player_score(self, rules: GameRules) -> PlayerScore:
        return PlayerScore(
            total_score=self.total_score,
            current_turn_score=self.current_turn_score,
            is_on_board=self.is_on_board,
            rules=rules,
        )


class TurnRecord(BaseModel):
    """Mirrors the `turns` table."""

    id: UUID
    game_id: UUID
    player_id: UUID
    turn_number: int
    status: str = TurnStatus.ACTIVE.value
    outcome: str | None = None
    roll_count: int = 0
    points_scored: int = 0
    points_banked: int = 0
    dice_remaining: int = GameRules.TOTAL_DICE
    roll_history: list[list[int]] = Field(default_factory=list)
    started_at: datetime
    ended_at: datetime | None = None
    duration_seconds: int | None = None

    model_config = {"from_attributes": True}

    @field_validator("roll_history", mode="before")
    @classmethod
    def _parse_roll_history(cls, value: Any) -> Any:
        """Accept the legacy JSON-string column as well as a JSON array."""
        if value is None:
            return []
        if isinstance(value, str):
            return json.loads(value or "[]")
        return value

    def roll_history_tuple(self) -> tuple[tuple[int, ...], ...]:
        return tuple(tuple(roll) for roll in self.roll_history)

    def to_turn_state(self, player: PlayerScore, rules: GameRules) -> TurnState:
        """Rebuild the domain turn, e.g. to resume an active turn."""
        return TurnState(
            player=player,
            rules=rules,
            turn_number=self.turn_number,
            status=TurnStatus(self.status),
            outcome=TurnStatus(self.outcome) if self.outcome else None,
            roll_count=self.roll_count,
            points_scored=self.points_scored,
            points_banked=self.points_banked,
            dice_remaining=self.dice_remaining,
            roll_history=list(self.roll_history_tuple()),
            started_at=self.started_at,
            ended_at=self.ended_at,
        )


def turn_state_payload(turn: TurnState) -> dict[str, Any]:
    """Columns written for a TurnState. Roll history becomes an array-of-arrays."""
    return dict(turn.snapshot())
