"""Configuration management for the advance ledger."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

STORAGE_BACKENDS = ("memory", "file", "database")


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment."""

    storage_backend: str
    storage_path: str
    database_url: str
    host: str
    port: int
    debug: bool
    log_level: str

    def __post_init__(self) -> None:
        if self.storage_backend not in STORAGE_BACKENDS:
            raise ValueError(
                f"Unknown storage backend '{self.storage_backend}', "
                f"expected one of {', '.join(STORAGE_BACKENDS)}"
            )

    @classmethod
    def from_env(cls) -> Settings:
        """Load settings from environment variables."""
        load_dotenv()

        return cls(
            storage_backend=os.getenv("STORAGE_BACKEND", "file").lower(),
            storage_path=os.getenv("STORAGE_PATH", "advance_ledger.json"),
            database_url=os.getenv("DATABASE_URL", "sqlite:///advance_ledger.db"),
            host=os.getenv("HOST", "127.0.0.1"),
            port=int(os.getenv("PORT", "8000")),
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings.from_env()


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for entry points, replacing existing handlers."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        force=True,
    )
