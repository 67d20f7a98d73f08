# reviewhub/config/settings.py

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Application ---
    app_name: str = "reviewhub-audit"
    environment: Literal["dev", "test", "prod"] = "dev"
    debug: bool = False
    version: str = "1.0.0"

    # --- Audit ---
    # Keyed-hash component for audit integrity. Empty weakens tamper evidence;
    # production deployments should set it and enable audit_require_secret.
    audit_encryption_key: str = ""
    audit_require_secret: bool = False

    # --- Database ---
    database_url: str = "postgresql+asyncpg://localhost:5432/reviewhub"

    # --- Observability ---
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


@lru_cache
def get_settings() -> AppSettings:
    return AppSettings()
