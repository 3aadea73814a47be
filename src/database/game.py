"""
Farkle - Game Manager

CRUD operations for the `games` table.
"""

from supabase import Client

from src.database.models import GameRecord
from src.engine.base import GameStatus
from src.engine.game import generate_game_code


class GameManager:
    """Manages game lifecycle in Supabase."""

    def __init__(self, client: Client) -> None:
        self.client = client
        self.table = client.table("games")

    def create(self, winning_score: int) -> GameRecord:
        """Create a new game with a unique join code."""
        data = (
            self.table
            .insert({
                "code": generate_game_code(),
                "status": GameStatus.WAITING_FOR_PLAYERS.value,
                "winning_score": winning_score,
            })
            .execute()
        )
        return GameRecord.model_validate(data.data[0])

    def get_by_code(self, code: str) -> GameRecord | None:
        """Look up a game by its join code."""
        data = (
            self.table
            .select("*")
            .eq("code", code.strip().upper())
            .execute()
        )
        if data.data:
            return GameRecord.model_validate(data.data[0])
        return None

    def get_by_id(self, game_id: str) -> GameRecord | None:
        """Look up a game by its UUID."""
        data = (
            self.table
            .select("*")
            .eq("id", game_id)
            .execute()
        )
        if data.data:
            return GameRecord.model_validate(data.data[0])
        return None

    def list_waiting(self, limit: int = 20) -> list[GameRecord]:
        """Newest games still waiting for a second player."""
        data = (
            self.table
            .select("*")
            .eq("status", GameStatus.WAITING_FOR_PLAYERS.value)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [GameRecord.model_validate(row) for row in data.data]

    def update_status(self, game_id: str, status: GameStatus) -> GameRecord:
        """Move a game to a new lifecycle status."""
        data = (
            self.table
            .update({"status": status.value})
            .eq("id", game_id)
            .execute()
        )
        return GameRecord.model_validate(data.data[0])

    def advance_turn(self, game_id: str, next_player_index: int) -> GameRecord:
        """Hand the turn to the next player."""
        data = (
            self.table
            .update({"current_player_index": next_player_index})
            .eq("id", game_id)
            .execute()
        )
        return GameRecord.model_validate(data.data[0])

    def set_winner(self, game_id: str, winner_id: str) -> GameRecord:
        """Record the winning player and mark the game finished."""
        data = (
            self.table
            .update({
                "winner_id": winner_id,
                "status": GameStatus.COMPLETED.value,
            })
            .eq("id", game_id)
            .execute()
        )
        return GameRecord.model_validate(data.data[0])

    def delete(self, game_id: str) -> None:
        """Delete a game (cascades to players and turns)."""
        self.table.delete().eq("id", game_id).execute()
