"""
Farkle - Application Settings

Loads configuration from environment variables using Pydantic Settings.
Rule values are turned into the engine's GameRules; the engine itself never
reads the environment.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from src.engine.base import AIDifficulty, GameRules


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Supabase
    supabase_url: str
    supabase_anon_key: str

    # Application
    debug: bool = False
    log_level: str = "INFO"

    # Game rules
    winning_score: int = Field(default=5000, gt=0)
    on_board_minimum: int = Field(default=500, ge=0)
    hot_dice_enabled: bool = True
    ai_max_rolls_per_turn: int = Field(default=50, ge=1)
    default_ai_difficulty: str = "medium"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level {value!r}.")
        return level

    @field_validator("default_ai_difficulty")
    @classmethod
    def _check_difficulty(cls, value: str) -> str:
        return AIDifficulty.from_name(value).name.lower()

    @property
    def ai_difficulty(self) -> AIDifficulty:
        return AIDifficulty.from_name(self.default_ai_difficulty)

    def game_rules(self) -> GameRules:
        """Build the engine's rule object from these settings."""
        return GameRules(
            winning_score=self.winning_score,
            on_board_minimum=self.on_board_minimum,
            hot_dice_enabled=self.hot_dice_enabled,
            max_ai_rolls_per_turn=self.ai_max_rolls_per_turn,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached singleton settings instance."""
    return Settings()
