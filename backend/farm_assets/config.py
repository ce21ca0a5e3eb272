"""Application Configuration - environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) - single instance per process
    - The core never reads settings; services receive values through constructors

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for every setting: works out-of-the-box for local runs
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    app_name: str = "Farm Assets API"
    app_version: str = "1.0.0"

    # Area photo uploads
    upload_path_area: str = "uploads/areas"
    max_photo_bytes: int = 5 * 1024 * 1024

    @field_validator("upload_path_area")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/") or "."

    # API
    cors_origins: list[str] = ["http://localhost:8080"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
