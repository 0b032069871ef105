"""Tests for settings loading."""

import pytest
from pydantic import ValidationError

from guest_cards.config import Settings, parse_cors_origins


def test_missing_required_settings_are_all_reported(monkeypatch) -> None:
    for name in ("SUPABASE_URL", "SUPABASE_SERVICE_KEY", "STORAGE_BUCKET"):
        monkeypatch.delenv(name, raising=False)

    with pytest.raises(ValidationError) as exc_info:
        Settings(_env_file=None)

    missing = {error["loc"][0] for error in exc_info.value.errors()}
    assert missing == {"supabase_url", "supabase_service_key", "storage_bucket"}


def test_settings_read_environment(monkeypatch) -> None:
    monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")
    monkeypatch.setenv("SUPABASE_SERVICE_KEY", "key")
    monkeypatch.setenv("STORAGE_BUCKET", "cards")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("DB_RETRY_MAX_ATTEMPTS", "4")

    settings = Settings(_env_file=None)

    assert settings.port == 8080
    assert settings.db_retry_max_attempts == 4
    assert settings.db_retry_interval_seconds == 5.0
    assert settings.signed_url_ttl_days == 365
    assert settings.storage_prefix == "hedayat"
    assert settings.font_size == 26


def test_parse_cors_origins() -> None:
    assert parse_cors_origins(None) == ["*"]
    assert parse_cors_origins(" * ") == ["*"]
    assert parse_cors_origins("") == ["*"]
    assert parse_cors_origins("https://a.test, https://b.test,") == [
        "https://a.test",
        "https://b.test",
    ]


def test_environment_defaults_to_production(monkeypatch) -> None:
    monkeypatch.delenv("ENVIRONMENT", raising=False)

    settings = Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="key",
        storage_bucket="cards",
        _env_file=None,
    )

    assert settings.environment == "production"


def test_environment_local_is_opt_in(monkeypatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "local")

    settings = Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="key",
        storage_bucket="cards",
        _env_file=None,
    )

    assert settings.environment == "local"
