"""Configuration management for PokeBattle."""

import logging
import os
from pathlib import Path

from pydantic import BaseModel


class Config(BaseModel):
    """Application configuration."""

    # Paths
    data_dir: Path = Path.home() / ".pokebattle"
    cache_dir: Path = Path.home() / ".pokebattle" / "cache"

    # PokeAPI settings
    pokeapi_base_url: str = "https://pokeapi.co/api/v2"
    request_timeout: float = 10.0

    # Battle settings
    default_level: int = 50
    quick_battle_max_id: int = 151  # Kanto only
    move_scan_limit: int = 20  # Learnable moves inspected when building a quick moveset
    move_candidate_limit: int = 8  # Damaging moves kept from the scan

    # Persistence
    database_url: str = os.getenv(
        "POKEBATTLE_DATABASE_URL",
        f"sqlite:///{Path.home() / '.pokebattle' / 'pokebattle.db'}",
    )

    # Logging
    log_level: str = os.getenv("POKEBATTLE_LOG_LEVEL", "WARNING")

    def ensure_dirs(self) -> None:
        """Create necessary directories if they don't exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.cache_dir.mkdir(parents=True, exist_ok=True)


def configure_logging(level: str | None = None) -> None:
    """Set up root logging for the CLI and server entry points."""
    logging.basicConfig(
        level=(level or config.log_level).upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


# Global config instance
config = Config()
