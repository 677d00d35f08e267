"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

SUPABASE_BACKEND = "supabase"
MEMORY_BACKEND = "memory"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    storage_backend: str = SUPABASE_BACKEND
    supabase_url: str | None = None
    supabase_key: str | None = None
    supabase_access_token: str | None = None
    supabase_refresh_token: str | None = None
    app_id: str = "default-app-id"
    retry_attempts: int = 5
    retry_base_delay_seconds: float = 1.0
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
