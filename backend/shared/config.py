"""
Centralized configuration for the AutoStyle backend.

All settings are loaded from environment variables with sensible defaults.
Every variable carries the AUTOSTYLE_ prefix (e.g., AUTOSTYLE_JWT_SECRET).
"""

from datetime import timedelta
from functools import lru_cache
from typing import Literal
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="AUTOSTYLE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "AutoStyle API"
    app_version: str = "1.0.0"
    environment: Literal["development", "production"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["*"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase (users and orders tables)
    supabase_url: str = ""
    supabase_service_role_key: str = ""

    # Direct PostgreSQL connection, used by run_migrations.py only
    database_url: str = ""

    # Authentication
    jwt_secret: str = ""
    jwt_algorithm: Literal["HS256"] = "HS256"
    token_ttl: timedelta = timedelta(days=7)
    hash_cost_factor: int = Field(default=10, ge=4, le=31)

    # Operator-only endpoints (GET /api/orders). Empty disables them.
    operator_api_key: str = ""

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
