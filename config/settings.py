"""Application settings and configuration management."""
from __future__ import annotations

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or defaults."""

    DB_PATH: str = Field(default="data/techwell.db")
    DB_TIMEOUT_S: float = Field(default=5.0, gt=0)

    CERTIFICATE_PREFIX: str = "TW"
    CERTIFICATE_YEAR_IN_ID: bool = True
    CERTIFICATE_SEQUENCE_DIGITS: int = Field(default=6, ge=1, le=12)
    CERTIFICATE_VALIDITY_MONTHS: Optional[int] = Field(default=None, ge=1)
    CERTIFICATE_SIGNATORY_NAME: str = "Director"
    CERTIFICATE_SIGNATORY_TITLE: str = "Academic Director"

    model_config = SettingsConfigDict(env_file=".env", validate_assignment=True)


settings = Settings()
