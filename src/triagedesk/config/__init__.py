"""
Configuration Module
====================

Application settings and configuration management using Pydantic.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from functools import lru_cache
from pathlib import Path
from typing import List, Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses Pydantic for validation and type safety.
    """

    # ========== Application ==========
    app_name: str = Field(default="triagedesk", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Root logging level")

    # ========== Server ==========
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, description="Server port", ge=1, le=65535)

    # ========== Database ==========
    database_url: str = Field(
        default="sqlite+aiosqlite:///./triagedesk.db",
        description="Async SQLAlchemy URL (sqlite+aiosqlite or postgresql+asyncpg)"
    )
    db_pool_size: int = Field(default=5, description="Database connection pool size", ge=1)
    db_max_overflow: int = Field(default=10, description="Max overflow connections", ge=0)
    seed_default_data: bool = Field(
        default=True,
        description="Install default categories and templates into an empty database"
    )

    # ========== Matching Rules ==========
    matching_rules_path: Path = Field(
        default=Path("matching_rules.yaml"),
        description="Optional YAML file overriding matching weights and keyword tables"
    )

    # ========== Analytics ==========
    analytics_snapshot_interval: int = Field(
        default=3600,
        description="Seconds between analytics snapshots (0 disables the job)",
        ge=0
    )
    trend_days: int = Field(
        default=7,
        description="Default number of days in the trends chart",
        ge=1,
        le=90
    )

    # ========== CORS ==========
    cors_origins: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"],
        description="Allowed CORS origins"
    )

    # ========== Grafana OTLP Metrics ==========
    grafana_host: Optional[str] = Field(
        default=None,
        description="Grafana OTLP gateway URL (e.g., https://otlp-gateway-prod-eu-west-2.grafana.net)"
    )
    grafana_api_key: Optional[str] = Field(
        default=None,
        description="Grafana API key for OTLP authentication"
    )
    grafana_instance_id: Optional[str] = Field(
        default=None,
        description="Grafana instance ID for OTLP authentication"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is one of allowed values."""
        allowed = {"development", "staging", "production", "test"}
        if v not in allowed:
            raise ValueError(f"environment must be one of {allowed}")
        return v


@lru_cache()
def get_settings() -> Settings:
    """Returns cached Settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


# ========== Constants ==========

class InquiryStatus(str):
    """Inquiry lifecycle statuses."""
    PENDING = "pending"
    RESPONDED = "responded"
    ESCALATED = "escalated"


DEFAULT_CATEGORY_COLOR = "#1976D2"
UNCATEGORIZED_LABEL = "Other"
UNCATEGORIZED_COLOR = "#F44336"

MIN_SATISFACTION_SCORE = 1
MAX_SATISFACTION_SCORE = 5

