"""Application configuration from environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./access_hub.db",
        description="SQLAlchemy async database URL",
    )
    database_echo: bool = Field(default=False, description="Log SQL queries")

    # Tokens
    jwt_access_secret: str = Field(
        default="change-me-access-secret", description="Signing key for access tokens"
    )
    jwt_refresh_secret: str = Field(
        default="change-me-refresh-secret", description="Signing key for refresh tokens"
    )
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    access_token_expire_minutes: int = Field(
        default=15, description="Lifetime of an access token in minutes"
    )
    refresh_token_expire_days: int = Field(
        default=1, description="Lifetime of a refresh token in days"
    )

    # Passwords
    bcrypt_rounds: int = Field(default=10, ge=4, le=31, description="bcrypt cost factor")

    # HTTP
    cors_origins: list[str] = Field(
        default=["http://localhost:5173"], description="Origins allowed by CORS"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: str = Field(default="logs/server.log", description="Server log file path")

    # API
    api_title: str = Field(default="Access Hub API", description="API title")
    api_version: str = Field(default="0.1.0", description="API version")


# Global settings instance
settings = Settings()

__all__ = ["Settings", "settings"]
