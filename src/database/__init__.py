"""
Farkle Database Layer.

Supabase integration for games, players, and turn history persistence.
"""

from src.database.client import create_supabase_client, get_supabase_client
from src.database.game import GameManager
from src.database.models import GameRecord, PlayerRecord, TurnRecord, turn_state_payload
from src.database.player import PlayerManager
from src.database.turn import TurnManager

__all__ = [
    "create_supabase_client",
    "get_supabase_client",
    "GameManager",
    "GameRecord",
    "PlayerManager",
    "PlayerRecord",
    "TurnManager",
    "TurnRecord",
    "turn_state_payload",
]
