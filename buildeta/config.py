"""Runtime configuration — env-driven.

Reads ``BUILDETA_*`` environment variables and an optional ``.env`` file
in the working directory.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ProgressSettings(BaseSettings):
    """Progress display settings with environment variable overrides.

    Examples
    --------
    Override via environment::

        export BUILDETA_SAMPLE_INTERVAL=1
        export BUILDETA_LOG_LEVEL=DEBUG
        export BUILDETA_PROGRAM=false
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="BUILDETA_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Sampling
    sample_interval: float = Field(default=5.0, gt=0)

    # Estimator tuning
    guess_decay: float = Field(default=10.0, gt=0)
    work_decay: float = Field(default=1.2, gt=0)

    # Sinks
    titlebar: bool = True
    program: bool = True
    program_name: str = "shake-progress"

    # Observability
    log_level: str = "INFO"


# Module-level singleton — import as `from buildeta.config import settings`
settings = ProgressSettings()
