"""
Runtime configuration helpers for the video-sharing client.

Loads the API location, local session storage URL and logging options from
the environment, falling back to the .env file in the project root.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve the project root
BASE_DIR = Path(__file__).resolve().parents[1]

# Absolute path to .env
ENV_PATH = BASE_DIR / ".env"

# Load .env defaults without overriding environment variables provided by the platform
load_dotenv(dotenv_path=ENV_PATH, override=False)


class Settings(BaseSettings):
    app_name: str = Field(default="VideoShare", alias="VIDSHARE_APP_NAME")

    api_url: str = Field(default="http://localhost:8000", alias="VIDSHARE_API_URL")
    api_timeout: float = Field(default=30.0, alias="VIDSHARE_API_TIMEOUT")

    # Durable client-side state (credential + identity only); the optional
    # VIDSHARE_VAULT_KEY is read by vidshare.security.vault
    session_db_url: str = Field(
        default="sqlite+pysqlite:///./vidshare_session.db",
        alias="VIDSHARE_SESSION_DB_URL",
    )
    session_slot: str = Field(default="default", alias="VIDSHARE_SESSION_SLOT")

    log_level: str = Field(default="INFO", alias="VIDSHARE_LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
