"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

STORAGE_BACKENDS = frozenset({"file", "supabase"})


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    calorieninjas_api_key: str = ""
    calorieninjas_base_url: str = "https://api.calorieninjas.com/v1"
    log_storage_backend: str = "file"
    log_data_dir: str = "data"
    log_slot: str = "nutrition_history"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_storage_backend(raw: str | None) -> str:
    """Normalize the log storage backend name from env."""
    if raw is None:
        return "file"
    cleaned = raw.strip().lower()
    if cleaned == "":
        return "file"
    if cleaned not in STORAGE_BACKENDS:
        msg = f"Unknown log storage backend: {raw!r}"
        raise ValueError(msg)
    return cleaned
