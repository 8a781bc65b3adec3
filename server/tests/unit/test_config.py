"""Unit tests for settings validation."""

import pytest
from pydantic import ValidationError

from voyage_site.core.config import Settings


def test_cors_origins_from_comma_separated_string(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "http://localhost:3000, https://voyages.example.com")

    settings = Settings()

    assert settings.cors_origins == ["http://localhost:3000", "https://voyages.example.com"]


def test_environment_is_normalized():
    settings = Settings(environment="Production", log_level="debug")

    assert settings.environment == "production"
    assert settings.is_production is True
    assert settings.debug is False
    assert settings.log_level == "DEBUG"


def test_invalid_environment_rejected():
    with pytest.raises(ValidationError):
        Settings(environment="qa")


def test_session_header_default():
    assert Settings().session_header == "X-Session-ID"
