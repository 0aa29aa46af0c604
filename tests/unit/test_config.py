"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from access_hub.config import Settings


def test_defaults(monkeypatch):
    for name in ("ACCESS_TOKEN_EXPIRE_MINUTES", "REFRESH_TOKEN_EXPIRE_DAYS", "JWT_ALGORITHM"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.access_token_expire_minutes == 15
    assert settings.refresh_token_expire_days == 1
    assert settings.jwt_algorithm == "HS256"


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://db/access")
    monkeypatch.setenv("ACCESS_TOKEN_EXPIRE_MINUTES", "5")
    monkeypatch.setenv("CORS_ORIGINS", '["https://hub.example.com"]')

    settings = Settings(_env_file=None)

    assert settings.database_url == "postgresql+asyncpg://db/access"
    assert settings.access_token_expire_minutes == 5
    assert settings.cors_origins == ["https://hub.example.com"]


def test_bcrypt_rounds_lower_bound(monkeypatch):
    monkeypatch.setenv("BCRYPT_ROUNDS", "2")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
