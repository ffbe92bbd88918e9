"""
Jackpot Dice - Application Settings

Loads configuration from environment variables using Pydantic Settings.
"""

import logging
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings

from src.engine.base import LEADERBOARD_CAPACITY, ROLL_COOLDOWN_SECONDS

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Supabase (only needed by the database layer)
    supabase_url: str | None = None
    supabase_anon_key: str | None = None

    # Game
    operator_address: str = "00" * 32
    price_to_play: int = 100_000_000
    rounds_until_jackpot: int = 0
    roll_cooldown_seconds: int = ROLL_COOLDOWN_SECONDS
    leaderboard_capacity: int = LEADERBOARD_CAPACITY
    unique_leaderboard: bool = False
    strict_end_game: bool = False

    # Application
    debug: bool = False
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    @field_validator("operator_address")
    @classmethod
    def _check_operator_address(cls, value: str) -> str:
        raw = bytes.fromhex(value)
        if len(raw) != 32:
            raise ValueError("operator_address must be 32 bytes of hex.")
        return value.lower()

    @field_validator("price_to_play", "rounds_until_jackpot", "roll_cooldown_seconds")
    @classmethod
    def _check_non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("must not be negative.")
        return value

    @field_validator("leaderboard_capacity")
    @classmethod
    def _check_capacity(cls, value: int) -> int:
        if value < 1:
            raise ValueError("leaderboard_capacity must be at least 1.")
        return value

    @property
    def operator_address_bytes(self) -> bytes:
        return bytes.fromhex(self.operator_address)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached singleton settings instance."""
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Apply the configured log level to the root logger."""
    settings = settings or get_settings()
    level = logging.DEBUG if settings.debug else settings.log_level.upper()
    logging.basicConfig(level=level, format=_LOG_FORMAT)
    logging.getLogger().setLevel(level)
