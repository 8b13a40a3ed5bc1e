"""Application configuration loaded from environment variables."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "hive-health"
    debug: bool = False
    log_level: str = "INFO"

    # Inspection evaluator
    # Revisit days and the confidence floor may only be tightened.
    default_revisit_days: int = Field(7, ge=1, le=7)
    confidence_missing_penalty: float = Field(0.12, ge=0.0)
    confidence_floor: float = Field(0.35, ge=0.35, le=1.0)
    max_chips: int = Field(5, ge=1)
    smart_top_n: int = Field(3, ge=0)

    # History aggregator
    trend_threshold: int = Field(5, ge=0)

    model_config = {"env_prefix": "HIVE_HEALTH_"}


settings = Settings()
