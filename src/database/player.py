"""
Farkle - Player Manager

CRUD operations for the `players` table.
"""

from supabase import Client

from src.database.models import PlayerRecord
from src.engine.base import AIDifficulty
from src.engine.game import GamePlayer
from src.engine.turn import PlayerScore


class PlayerManager:
    """Manages player records in Supabase."""

    def __init__(self, client: Client) -> None:
        self.client = client
        self.table = client.table("players")

    def join(
        self,
        game_id: str,
        name: str,
        turn_order: int,
        *,
        is_ai: bool = False,
        ai_difficulty: AIDifficulty = AIDifficulty.MEDIUM,
    ) -> PlayerRecord:
        """Add a human or AI player to a game."""
        data = (
            self.table
            .insert({
                "game_id": game_id,
                "name": name,
                "turn_order": turn_order,
                "is_ai": is_ai,
                "ai_difficulty": ai_difficulty.value,
            })
            .execute()
        )
        return PlayerRecord.model_validate(data.data[0])

    def join_seat(self, game_id: str, player: GamePlayer) -> PlayerRecord:
        """Persist a player seated by FarkleGame, keeping its resolved AI difficulty."""
        return self.join(
            game_id,
            player.name,
            player.turn_order,
            is_ai=player.is_ai,
            ai_difficulty=player.ai_difficulty,
        )

    def get(self, player_id: str) -> PlayerRecord | None:
        """Get a single player by ID."""
        data = (
            self.table
            .select("*")
            .eq("id", player_id)
            .execute()
        )
        if data.data:
            return PlayerRecord.model_validate(data.data[0])
        return None

    def list_by_game(self, game_id: str) -> list[PlayerRecord]:
        """Get all players in a game, ordered by turn."""
        data = (
            self.table
            .select("*")
            .eq("game_id", game_id)
            .order("turn_order")
            .execute()
        )
        return [PlayerRecord.model_validate(row) for row in data.data]

    def update_scores(self, player_id: str, score: PlayerScore) -> PlayerRecord:
        """Write a player's banked, unbanked and on-board state."""
        data = (
            self.table
            .update({
                "total_score": score.total_score,
                "current_turn_score": score.current_turn_score,
                "is_on_board": score.is_on_board,
            })
            .eq("id", player_id)
            .execute()
        )
        return PlayerRecord.model_validate(data.data[0])

    def set_connected(self, player_id: str, is_connected: bool) -> PlayerRecord:
        """Update a player's connection status."""
        data = (
            self.table
            .update({"is_connected": is_connected})
            .eq("id", player_id)
            .execute()
        )
        return PlayerRecord.model_validate(data.data[0])

    def count_in_game(self, game_id: str) -> int:
        """Count players seated in a game."""
        data = (
            self.table
            .select("id", count="exact")
            .eq("game_id", game_id)
            .execute()
        )
        return data.count or 0
