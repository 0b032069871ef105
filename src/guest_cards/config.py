"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "production")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    storage_bucket: str
    cards_table: str = "cards"
    storage_prefix: str = "hedayat"
    signed_url_ttl_days: int = 365
    template_path: str = "assets/template.jpg"
    latin_font_path: str = "assets/GlacialIndifference-Bold.otf"
    arabic_font_path: str = "assets/NotoSansArabic-Bold.ttf"
    font_size: int = 26
    port: int = 3002
    cors_allow_origins: str = "*"
    db_retry_interval_seconds: float = 5.0
    db_retry_max_attempts: int | None = None
    log_level: str = "INFO"
    environment: str = "production"

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_cors_origins(raw: str | None) -> list[str]:
    """Parse allowed CORS origins from env."""
    if raw is None:
        return ["*"]
    cleaned = raw.strip()
    if cleaned in {"", "*"}:
        return ["*"]
    origins = [chunk.strip() for chunk in cleaned.split(",")]
    return [origin for origin in origins if origin] or ["*"]
