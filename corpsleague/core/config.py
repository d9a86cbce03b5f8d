# corpsleague/core/config.py
from __future__ import annotations

import json
from typing import List, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


EnvType = Literal["local", "dev", "staging", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # App
    APP_NAME: str = "CorpsLeagueScoring"
    APP_ENV: EnvType = "local"
    LOG_LEVEL: LogLevel = "INFO"

    # CORS
    CORS_ORIGINS: str | List[str] = Field(
        default='["http://localhost:5173","http://127.0.0.1:5173"]',
        description="JSON list or comma-separated origins",
    )

    # League calendar
    DAYS_PER_WEEK: int = Field(default=7, description="Off-season days per scoring week")
    DEFAULT_SEASON_ID: str = "current"

    # In-process cache for /league/stats
    STATS_CACHE_TTL_SECONDS: int = 5 * 60
    STATS_CACHE_MAX_ENTRIES: int = Field(default=128, description="Distinct request bodies kept per process")

    @property
    def IS_LOCAL(self) -> bool:
        return self.APP_ENV == "local"

    # ---------- Validators ----------

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _upper_level(cls, v):
        return str(v).strip().upper() if v is not None else v

    @field_validator("CORS_ORIGINS")
    @classmethod
    def _parse_cors(cls, v):
        # Accept JSON list or comma-separated string
        if isinstance(v, list):
            return v
        s = str(v).strip()
        if not s:
            return []
        try:
            parsed = json.loads(s)
            if isinstance(parsed, list):
                return parsed
        except ValueError:
            pass
        # fallback: comma-separated
        return [p.strip() for p in s.split(",") if p.strip()]

    # ---------- Runtime validations ----------

    def validate_at_startup(self) -> None:
        """Fail fast with clear messages for misconfigurations."""
        problems: list[str] = []

        if self.DAYS_PER_WEEK < 1:
            problems.append("DAYS_PER_WEEK must be at least 1.")
        if self.STATS_CACHE_TTL_SECONDS < 0:
            problems.append("STATS_CACHE_TTL_SECONDS must not be negative.")
        if self.STATS_CACHE_MAX_ENTRIES < 1:
            problems.append("STATS_CACHE_MAX_ENTRIES must be at least 1.")
        if not self.DEFAULT_SEASON_ID.strip():
            problems.append("DEFAULT_SEASON_ID must not be empty.")

        # CORS must not be empty outside local
        if not self.IS_LOCAL and not self.CORS_ORIGINS:
            problems.append("CORS_ORIGINS must contain at least one allowed origin in non-local env.")

        if problems:
            # Collapse to one helpful error line
            raise RuntimeError("Config validation failed: " + " ".join(problems))


settings = Settings()
