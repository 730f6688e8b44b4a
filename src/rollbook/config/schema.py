"""Pydantic schema for repository configuration."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

IndexStrategy = Literal["hash", "sorted"]
ScorePolicy = Literal["permissive", "strict"]

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class RepositoryConfig(BaseModel):
    """Validated runtime configuration with defaults."""

    model_config = ConfigDict(extra="forbid")

    index_strategy: IndexStrategy = "hash"

    history_enabled: bool = True
    history_limit: int | None = Field(default=None, gt=0)

    score_policy: ScorePolicy = "permissive"
    max_score: int = Field(default=100, gt=0)

    default_fee: int = Field(default=1500, ge=0)

    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level '{value}'.")
        return level
