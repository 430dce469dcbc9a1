"""
Configuration for the logging facade.

Each domain has its own environment prefix:

    APP_ENV             -> EnvironmentSettings.env
    LOGGING_LEVEL_ROOT  -> LoggingSettings.level_root
    LOGGING_LEVEL_<ID>  -> read per identifier by logfacade.levels

Settings are built fresh for each logger construction and each level
resolution, so a changed environment is picked up by the next logger.

Usage:
    from logfacade.config import Settings

    settings = Settings()
    settings.environment.is_dev
    settings.logging.level_root
"""

from functools import cached_property

from pydantic_settings import BaseSettings, SettingsConfigDict

from .environment import DEV_ENV, EnvironmentSettings
from .logging import LEVEL_ENV_PREFIX, ROOT_LEVEL_KEY, LevelSettings, LoggingSettings


class Settings(BaseSettings):
    """Composite settings aggregating the configuration domains."""

    model_config = SettingsConfigDict(extra="ignore")

    @cached_property
    def environment(self) -> EnvironmentSettings:
        return EnvironmentSettings()

    @cached_property
    def logging(self) -> LoggingSettings:
        return LoggingSettings()


__all__ = [
    "DEV_ENV",
    "LEVEL_ENV_PREFIX",
    "ROOT_LEVEL_KEY",
    "EnvironmentSettings",
    "LevelSettings",
    "LoggingSettings",
    "Settings",
]
