# settings.py
from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from uuid import UUID
from typing import Literal


DEV_JWT_SECRET = "dev-secret-change-me"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    ENV: str = "dev"

    # -----------------------
    # Pool
    # -----------------------
    POOL_OPERATOR_ID: UUID = Field(default=UUID("00000000-0000-0000-0000-000000000001"))
    POOL_MIN_CONTRIBUTION: int = Field(default=50, ge=0)
    POOL_QUOTA: int = Field(default=0, ge=0)

    # -----------------------
    # Transfers
    # -----------------------
    TRANSFER_PROVIDER: Literal["treasury", "mock"] = "treasury"
    TREASURY_REJECTED_IDS: str = ""  # comma-separated UUIDs

    # -----------------------
    # JWT
    # -----------------------
    JWT_SECRET: str = Field(default=DEV_JWT_SECRET, min_length=16)
    JWT_ALG: str = Field(default="HS256")
    JWT_ACCESS_MINUTES: int = Field(default=60)

    DEBUG_TOKENS_ENABLED: bool = False


settings = Settings()


def _is_locked_env(env: str) -> bool:
    return (env or "").strip().lower() in {"staging", "prod", "production"}


def validate_env_settings() -> None:
    """
    Fail closed outside dev: collect every misconfigured key and raise once.
    """
    if not _is_locked_env(settings.ENV):
        return

    problems: list[str] = []
    secret = settings.JWT_SECRET or ""
    if secret == DEV_JWT_SECRET or len(secret) < 32:
        problems.append("JWT_SECRET")
    if settings.DEBUG_TOKENS_ENABLED:
        problems.append("DEBUG_TOKENS_ENABLED")
    if settings.TRANSFER_PROVIDER == "mock":
        problems.append("TRANSFER_PROVIDER")

    if problems:
        raise RuntimeError(f"Invalid settings for ENV={settings.ENV}: " + ", ".join(problems))
