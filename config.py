"""
Central configuration for the Shape Field sketch.
All canvas constants and environment-driven settings live here.
"""

from __future__ import annotations

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment / .env file."""

    # ── Canvas ──────────────────────────────────────────────────────
    CANVAS_WIDTH: int = Field(default=800, ge=1)
    CANVAS_HEIGHT: int = Field(default=800, ge=1)
    BACKGROUND_COLOR: str = "#000000"

    # ── Seeding ─────────────────────────────────────────────────────
    DEFAULT_SEED: int = Field(default=100, ge=0, lt=2**64)
    NUM_VARIATIONS: int = Field(default=4, ge=1)

    # ── Logging ─────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"

    @field_validator("LOG_LEVEL")
    @classmethod
    def _check_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


def configure_logging(level: str | None = None) -> None:
    """Install a message-only root handler at the configured level."""
    logging.basicConfig(
        level=level or settings.LOG_LEVEL,
        format="%(message)s",
    )


# Singleton instance
settings = Settings()
