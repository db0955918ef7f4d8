"""
Configuration for the expense tracker.

Uses pydantic-settings so defaults can be overridden from environment
variables (``EXPENSE_TRACKER_*``) or a local ``.env`` file. Command-line
options take precedence over anything loaded here.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .logging_setup import parse_level


class Settings(BaseSettings):
    """Application settings loaded from the environment."""

    model_config = SettingsConfigDict(
        env_prefix="EXPENSE_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    data_file: Path = Field(
        default=Path("expenses.json"),
        description="JSON backing file holding every expense",
    )
    export_file: Path = Field(
        default=Path("expenses.csv"),
        description="Default destination for the export command",
    )
    log_level: str = Field(
        default="WARNING",
        description="Logging level name for the CLI",
    )
    currency: str = Field(
        default="DH",
        description="Currency label appended to summary totals",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Reject level names the logging module does not know."""
        parse_level(v)
        return v.strip().upper()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload after the environment changes.
    """
    return Settings()
