from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ANALYTICS_RANGES = {"7days", "30days", "90days", "all"}


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
    )

    database_url: str = Field(
        default="sqlite+aiosqlite:///./data/moodjournal.db",
        alias="DATABASE_URL",
    )
    log_file: Path = Field(default=Path("logs/moodjournal.log"))
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    analytics_default_range: str = Field(default="7days", alias="ANALYTICS_DEFAULT_RANGE")
    journal_write_limit_per_min: int = Field(default=30, alias="JOURNAL_WRITE_LIMIT_PER_MIN")

    version: str = Field(default_factory=lambda: Settings._load_version())

    @staticmethod
    def _load_version() -> str:
        version_env = os.getenv("VERSION")
        if version_env:
            return version_env
        version_file = Path("VERSION")
        if version_file.exists():
            return version_file.read_text(encoding="utf-8").strip()
        return "0.0.0"

    @field_validator("log_file", mode="before")
    @classmethod
    def _validate_log_file(cls, value: Path | str) -> Path:
        path = Path(value)
        if not path.parent.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
        return path

    @field_validator("log_level", mode="before")
    @classmethod
    def _validate_log_level(cls, value: str | None) -> str:
        normalized = str(value or "INFO").upper()
        if normalized not in logging.getLevelNamesMapping():
            return "INFO"
        return normalized

    @field_validator("analytics_default_range", mode="before")
    @classmethod
    def _validate_analytics_range(cls, value: str | None) -> str:
        if not value:
            return "7days"
        normalized = str(value).lower()
        if normalized not in _ANALYTICS_RANGES:
            return "7days"
        return normalized

    @field_validator("journal_write_limit_per_min", mode="before")
    @classmethod
    def _validate_write_limit(cls, value: int | str | None) -> int:
        if value is None:
            return 30
        return max(int(value), 1)

    @field_validator("database_url", mode="before")
    @classmethod
    def _validate_database_url(cls, value: str | None) -> str:
        if not value:
            value = "sqlite:///./data/moodjournal.db"

        normalized = str(value)
        if normalized.startswith("postgres://"):
            normalized = normalized.replace("postgres://", "postgresql://", 1)
        if normalized.startswith("postgresql://") and "+asyncpg" not in normalized:
            normalized = normalized.replace("postgresql://", "postgresql+asyncpg://", 1)
        if normalized.startswith("sqlite://") and "+aiosqlite" not in normalized:
            normalized = normalized.replace("sqlite://", "sqlite+aiosqlite://", 1)

        if normalized.startswith("sqlite+aiosqlite:///"):
            db_path = normalized.split("///", maxsplit=1)[-1]
            if db_path and db_path != ":memory:":
                db_file = Path(db_path)
                db_file.parent.mkdir(parents=True, exist_ok=True)

        return normalized


@lru_cache
def get_settings() -> Settings:
    """Cached settings accessor."""

    return Settings()
