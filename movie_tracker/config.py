"""
Centralized configuration management using pydantic-settings.
This module provides a single source of truth for all application configuration.
"""


import os

from dotenv import load_dotenv
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from movie_tracker.utils.logger import setup_logger

load_dotenv(override=True)


logger = setup_logger("core_config")


class Settings(BaseSettings):
    """
    Application settings managed by pydantic-settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        # Allow override from environment variables
        env_prefix="",
    )

    # ===== Database Configuration =====
    app_database_url: str | None = Field(
        default=None,
        alias="MOVIE_TRACKER_DATABASE_URL",
        description="Application database URL (postgresql:// or sqlite+aiosqlite://)",
    )

    movie_tracker_schema: str | None = Field(
        default=None,
        alias="MOVIE_TRACKER_SCHEMA",
        description="Optional PostgreSQL schema for the application tables",
    )

    # ===== OMDb Configuration =====
    omdb_api_key: str | None = Field(
        default=None,
        alias="OMDB_API_KEY",
        description="API key for the OMDb movie metadata service",
    )

    omdb_base_url: str = Field(
        default="http://www.omdbapi.com/",
        alias="OMDB_BASE_URL",
        description="OMDb API endpoint",
    )

    omdb_timeout_seconds: float = Field(
        default=10.0,
        alias="OMDB_TIMEOUT_SECONDS",
        description="Timeout for a single OMDb request in seconds",
    )

    # ===== Authentication Configuration =====
    secret_key: str = Field(
        default="your-secret-key-change-this-in-production",
        alias="SECRET_KEY",
        description="Secret used to sign JWT access tokens",
    )

    jwt_algorithm: str = Field(
        default="HS256",
        alias="JWT_ALGORITHM",
        description="JWT signing algorithm",
    )

    access_token_expire_minutes: int = Field(
        default=60,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
        description="Lifetime of issued access tokens in minutes",
    )

    # ===== Server Configuration =====
    server_host: str = Field(
        default="0.0.0.0", alias="SERVER_HOST", description="Server host address"
    )

    server_port: int = Field(
        default=5000, alias="SERVER_PORT", description="Server port number"
    )

    server_workers: int = Field(
        default=1, alias="SERVER_WORKERS", description="Number of uvicorn workers"
    )

    # ===== CORS Configuration =====
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: [
            "http://localhost:5173",  # Vite dev server default port
            "http://localhost:3000",  # React dev server
            "http://127.0.0.1:5173",
        ],
        alias="CORS_ALLOW_ORIGINS",
        description="CORS allowed origins",
    )

    cors_allow_credentials: bool = Field(
        default=True,
        alias="CORS_ALLOW_CREDENTIALS",
        description="Whether to allow credentials in CORS requests",
    )

    cors_allow_methods: list[str] = Field(
        default_factory=lambda: ["*"],
        alias="CORS_ALLOW_METHODS",
        description="CORS allowed methods",
    )

    cors_allow_headers: list[str] = Field(
        default_factory=lambda: ["*"],
        alias="CORS_ALLOW_HEADERS",
        description="CORS allowed headers",
    )

    # User-facing hint for database connection errors
    db_unavailable_hint: str = os.getenv(
        "DB_UNAVAILABLE_HINT",
        "Database connection failed. The server may be offline or network connectivity is down.",
    )

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Validate settings and log warnings for missing critical configurations."""

        if not self.omdb_api_key:
            logger.warning("OMDB_API_KEY environment variable not set.")

        if not self.app_database_url:
            logger.warning("MOVIE_TRACKER_DATABASE_URL environment variable not set.")

        if self.secret_key == "your-secret-key-change-this-in-production":
            logger.warning("SECRET_KEY is using the built-in development default.")

        logger.debug(f"Using database schema: {self.schema_name or '<default>'}")

        return self

    @property
    def schema_name(self) -> str | None:
        return self.movie_tracker_schema or None


# Global settings instance
settings = Settings()
