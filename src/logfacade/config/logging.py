"""
Logging Configuration.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LEVEL_ENV_PREFIX = "LOGGING_LEVEL_"
ROOT_LEVEL_KEY = f"{LEVEL_ENV_PREFIX}ROOT"


class LevelSettings(BaseSettings):
    """Root level fallback.

    Kept apart from the console layout so that a bad layout value can never
    break level resolution. Per-identifier levels (`LOGGING_LEVEL_<ID>`) have
    dynamic keys and are read by the level resolver directly.
    """

    model_config = SettingsConfigDict(
        env_prefix="LOGGING_",
        extra="ignore",
        frozen=True,
    )

    level_root: str = Field(default="", description="Root log level used when no per-logger level is set")


class LoggingSettings(LevelSettings):
    """Logging facade configuration: root level plus console layout."""

    console_level_width: int = Field(default=5, description="Developer console level column width")
    console_separator: str = Field(default=" | ", description="Developer console column separator")
