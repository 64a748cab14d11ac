"""
Configuration - Environment-driven settings.

Environment variables:
    JOBGUESS_TIMER_SECONDS     Countdown length per question (default: 60)
    JOBGUESS_TIMER_EXPIRY      hold | stop | advance (default: hold)
    JOBGUESS_CATALOG_PATH      JSON file with the job catalog (default: built-in)
    JOBGUESS_LOG_LEVEL         Logging level (default: INFO)
    JOBGUESS_SESSION_MAX_AGE   Seconds before a session is cleaned up (default: 3600)
    JOBGUESS_SERVER_CLOCK      Tick running timers from the server (default: true)
    JOBGUESS_CLOCK_INTERVAL    Seconds between server clock ticks (default: 1.0)
    ALLOWED_ORIGINS            Comma separated CORS origins (default: *)

Values passed to GameConfig(...) override the environment.
"""

from __future__ import annotations
import logging
from typing import List, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .engine_core.timer import TimerExpiry, DEFAULT_DURATION_SECONDS


class GameConfig(BaseSettings):
    """Settings for sessions and the API."""

    model_config = SettingsConfigDict(
        env_prefix="JOBGUESS_",
        case_sensitive=False,
        env_ignore_empty=True,
    )

    timer_seconds: int = Field(DEFAULT_DURATION_SECONDS, ge=1, description="Countdown per question")
    timer_expiry: TimerExpiry = TimerExpiry.HOLD
    catalog_path: Optional[str] = Field(None, description="JSON catalog; built-in when unset")
    log_level: str = "INFO"
    session_max_age: int = Field(3600, ge=1, description="Seconds before cleanup ends a session")
    server_clock: bool = True
    clock_interval: float = Field(1.0, gt=0, description="Seconds between server clock ticks")
    allowed_origins: str = Field(
        "*",
        validation_alias=AliasChoices("allowed_origins", "ALLOWED_ORIGINS"),
        description="Comma-separated list of allowed CORS origins",
    )

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def allowed_origins_list(self) -> List[str]:
        """Parse CORS origins into a list."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging for the CLI and server entry points."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
