"""
Application Settings for the Subscription API

Centralized configuration using Pydantic Settings with .env support.
All environment variables are validated at startup.
"""

from functools import lru_cache
from typing import Optional
from urllib.parse import quote_plus

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    DATABASE_URL takes precedence; when it is not set the connection URL
    is assembled from the DB_* variables.
    """

    # Application Settings
    project_name: str = "Subscription API"
    api_version: str = "1.0.0"
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    server_host: str = "0.0.0.0"
    server_port: int = 8080

    # CORS Configuration
    allowed_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    # Database Configuration (SQLModel/SQLAlchemy)
    database_url: Optional[str] = None
    db_host: str = "localhost"
    db_port: int = 5432
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_name: str = "subscriptions_db"
    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_pool_timeout: int = 30
    database_echo: bool = False
    database_create_tables: bool = True

    # Upper bound (seconds) for a single statement against the store; the
    # commit that follows a mutation is not bounded
    database_statement_timeout: float = 5.0

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        """Upper-case the level name; unknown names fall back to INFO."""
        level = value.upper()
        if level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            return "INFO"
        return level

    @field_validator("database_statement_timeout")
    @classmethod
    def validate_statement_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("DATABASE_STATEMENT_TIMEOUT must be positive")
        return value

    @property
    def async_database_url(self) -> str:
        """
        Get the asyncpg connection URL.

        Rewrites plain postgres schemes of DATABASE_URL to the asyncpg
        driver, or builds the URL from the DB_* settings.
        """
        if self.database_url:
            url = self.database_url
            if url.startswith("postgresql://"):
                url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
            elif url.startswith("postgres://"):
                url = url.replace("postgres://", "postgresql+asyncpg://", 1)
            return url

        password = quote_plus(self.db_password)
        return (
            f"postgresql+asyncpg://{self.db_user}:{password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Convenience export for direct import
settings = get_settings()
