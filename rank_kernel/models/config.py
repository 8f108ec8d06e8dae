"""Ranking service configuration."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from rank_kernel.models.entity import DEFAULT_STEP


class RankingConfig(BaseModel):
    """Configuration for the ordering engine and its default store."""

    step: int = Field(gt=1, default=DEFAULT_STEP)
    db_path: Optional[str] = None           # None selects the in-memory store
    seed_demo_data: bool = False
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        level = v.strip().upper()
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if level not in allowed:
            raise ValueError(f"log_level must be one of {sorted(allowed)}")
        return level
