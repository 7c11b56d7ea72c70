import pytest
from pydantic import ValidationError

from dealership.core.config import Settings


def test_missing_secret_key_refuses_to_start(monkeypatch):
    monkeypatch.delenv("JWT_SECRET_KEY", raising=False)

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_short_secret_key_is_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, JWT_SECRET_KEY="short")


def test_database_url_takes_precedence():
    config = Settings(
        _env_file=None,
        JWT_SECRET_KEY="a-long-enough-secret-key",
        DATABASE_URL="sqlite:///./dealership.db",
    )

    assert config.SQLALCHEMY_DATABASE_URI == "sqlite:///./dealership.db"


def test_postgres_uri_is_assembled_from_parts(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    config = Settings(
        _env_file=None,
        JWT_SECRET_KEY="a-long-enough-secret-key",
        POSTGRES_SERVER="db",
        POSTGRES_USER="dealer",
        POSTGRES_PASSWORD="pw",
        POSTGRES_DB="stock",
    )

    assert config.SQLALCHEMY_DATABASE_URI.startswith("postgresql://dealer:pw@db:5432/")
    assert config.SQLALCHEMY_DATABASE_URI.endswith("stock")


def test_cors_origins_accept_comma_separated_string():
    config = Settings(
        _env_file=None,
        JWT_SECRET_KEY="a-long-enough-secret-key",
        BACKEND_CORS_ORIGINS="http://localhost:3000, https://admin.example.com",
    )

    assert config.BACKEND_CORS_ORIGINS == ["http://localhost:3000", "https://admin.example.com"]
