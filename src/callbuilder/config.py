"""Settings."""

from __future__ import annotations

from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for the command line and logging."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CALLBUILDER_",
        case_sensitive=False,
        extra="ignore",
    )

    log_filter: str = Field(default="info")
    strict: bool = Field(default=False)
    render_failures: bool = Field(default=True)


def load_settings(**overrides: Any) -> Settings:
    """Load settings from the environment, with explicit overrides on top."""
    return Settings(**{k: v for k, v in overrides.items() if v is not None})
