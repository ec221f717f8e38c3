"""
Application configuration using Pydantic Settings.

Single source of configuration for the candles service.
Loads from environment variables with .env file support.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CANDLE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Candle Space"
    app_version: str = "0.1.0"
    debug: bool = False
    sql_echo: bool = False  # Log all SQL statements (very verbose, disable by default)
    environment: Literal["development", "staging", "production"] = "development"
    log_level: str = "INFO"

    # API Settings
    api_prefix: str = "/api/v1"
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:5173", "http://localhost:3000"])

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | list[str]) -> list[str]:
        """Parse comma-separated string into list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    # Canvas limits enforced by the store
    world_width: int = 3000
    world_height: int = 2000
    max_note_length: int = 200
    max_country_code_length: int = 8

    # Database - PostgreSQL (production)
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "candle_space"
    postgres_password: str = "candle_space"
    postgres_db: str = "candle_space"

    # Database - SQLite (development)
    sqlite_path: str = "candle_space.db"
    use_sqlite: bool = True

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    @computed_field
    @property
    def postgres_dsn(self) -> str:
        """Build PostgreSQL connection string."""
        return f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"

    @computed_field
    @property
    def sqlite_dsn(self) -> str:
        """Build SQLite connection string."""
        return f"sqlite+aiosqlite:///{self.sqlite_path}"

    @computed_field
    @property
    def database_url(self) -> str:
        """Get the active database URL based on configuration."""
        if self.use_sqlite:
            return self.sqlite_dsn
        return self.postgres_dsn


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
