"""Environment-driven application settings.

Values are loaded from environment variables (prefix ``BITDIST_``) or a
``.env`` file in the working directory.  CLI options override them per run.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

MetricName = Literal["manhattan", "chebyshev", "euclidean"]


class Settings(BaseSettings):
    """Top-level settings."""

    model_config = SettingsConfigDict(
        env_prefix="BITDIST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    infinity_symbol: str = Field(default="∞", min_length=1)
    """Rendered for cells with no reachable on cell."""
    metric: MetricName = "manhattan"
    chunk_size: int = Field(default=65536, ge=1, le=16 * 1024 * 1024)
    """Bytes requested from the input per read."""
    log_level: str = "WARNING"


# Module-level singleton — import and use directly.
settings = Settings()


def get_settings() -> Settings:
    """Return the module-level Settings singleton."""
    return settings
