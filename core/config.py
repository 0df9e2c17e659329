"""Application configuration."""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Settings loaded from ``WHATS_CHANGED_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="WHATS_CHANGED_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Manifest file names compared between revisions
    manifest_names: list[str] = ["Cargo.toml", "package.json"]

    git_executable: str = "git"
    log_level: LogLevel = "WARNING"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value


@lru_cache
def get_settings() -> Settings:
    return Settings()
