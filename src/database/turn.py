"""
Farkle - Turn Manager

CRUD operations for the `turns` table. A row is written when a turn starts
and rewritten with the TurnState snapshot after every roll, bank or Farkle.
"""

from supabase import Client

from src.database.models import TurnRecord, turn_state_payload
from src.engine.base import TurnStatus
from src.engine.turn import TurnState


class TurnManager:
    """Manages turn records in Supabase."""

    def __init__(self, client: Client) -> None:
        self.client = client
        self.table = client.table("turns")

    def create(self, game_id: str, player_id: str, turn: TurnState) -> TurnRecord:
        """Insert the row for a freshly started turn."""
        data = (
            self.table
            .insert({
                "game_id": game_id,
                "player_id": player_id,
                **turn_state_payload(turn),
            })
            .execute()
        )
        return TurnRecord.model_validate(data.data[0])

    def get_active(self, game_id: str, player_id: str) -> TurnRecord | None:
        """Most recent active turn for a player, if any."""
        data = (
            self.table
            .select("*")
            .eq("game_id", game_id)
            .eq("player_id", player_id)
            .eq("status", TurnStatus.ACTIVE.value)
            .order("started_at", desc=True)
            .limit(1)
            .execute()
        )
        if data.data:
            return TurnRecord.model_validate(data.data[0])
        return None

    def save(self, turn_id: str, turn: TurnState) -> TurnRecord:
        """Overwrite a turn row with the current TurnState snapshot."""
        data = (
            self.table
            .update(turn_state_payload(turn))
            .eq("id", turn_id)
            .execute()
        )
        return TurnRecord.model_validate(data.data[0])

    def list_by_game(self, game_id: str) -> list[TurnRecord]:
        """Every turn of a game in play order, for replay."""
        data = (
            self.table
            .select("*")
            .eq("game_id", game_id)
            .order("turn_number")
            .execute()
        )
        return [TurnRecord.model_validate(row) for row in data.data]
