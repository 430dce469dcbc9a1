"""
Environment Configuration.

The console sink has exactly one branching point: `APP_ENV=dev` selects the
human-readable developer stream on stderr, anything else selects the
machine-oriented JSON stream on stdout.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEV_ENV = "dev"


class EnvironmentSettings(BaseSettings):
    """Process environment detection."""

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        extra="ignore",
        frozen=True,
    )

    env: str = Field(default="", description="Deployment mode; 'dev' enables the developer console")

    @property
    def is_dev(self) -> bool:
        return self.env.strip().lower() == DEV_ENV
