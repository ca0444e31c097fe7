"""Environment-driven library settings.

All values are loaded from environment variables (prefix ``IMAGEGRID_``)
or a ``.env`` file in the working directory.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ImageGridSettings(BaseSettings):
    """Top-level settings."""

    model_config = SettingsConfigDict(
        env_prefix="IMAGEGRID_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    random_seed: int | None = Field(default=None, ge=0)
    """Seed for the default generator used by ``imagegrid.sampling`` (None = fresh entropy)."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    log_format: str = "%(asctime)s  %(name)-30s  %(levelname)-7s  %(message)s"


# Module-level singleton, imported directly or through get_settings().
settings = ImageGridSettings()


def get_settings() -> ImageGridSettings:
    """Return the module-level settings singleton."""
    return settings
