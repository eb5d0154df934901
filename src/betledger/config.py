"""Environment-driven configuration helpers for BetLedger."""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import AnyUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or .env files."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    database_url: AnyUrl | str = Field(default="sqlite:///./betledger.db")

    dashboard_password: str = Field(default="", validation_alias="BETLEDGER_PASSWORD")
    session_secret: str = Field(default="change_me", validation_alias="BETLEDGER_SESSION_SECRET")
    session_max_age: int = Field(default=60 * 60 * 24 * 7, gt=0)

    log_level: str = Field(default="INFO")
    port: int = Field(default=3000, ge=1, le=65535)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings()  # type: ignore[call-arg]


def get_dashboard_password() -> str:
    """Return the dashboard password or raise a helpful error."""

    password = os.getenv("BETLEDGER_PASSWORD") or get_settings().dashboard_password
    if not password:
        raise RuntimeError(
            "BETLEDGER_PASSWORD is not configured. "
            "Set it in .env for local dev or in the server environment."
        )
    return password
