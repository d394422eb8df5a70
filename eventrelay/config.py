"""Runtime configuration — env-driven via pydantic-settings.

Reads from a .env file and EVENTRELAY_* environment variables.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from eventrelay.models.dispatch import ErrorPolicy


class RelaySettings(BaseSettings):
    """eventrelay settings with environment variable overrides.

    Examples
    --------
    Override via environment::

        export EVENTRELAY_LOG_LEVEL=DEBUG
        export EVENTRELAY_ERROR_POLICY=log
        export EVENTRELAY_EVENTS_PATH=/var/log/relay/events.jsonl
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="EVENTRELAY_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: str = "development"
    log_level: str = "INFO"

    # Default broadcast failure handling for new dispatchers
    error_policy: ErrorPolicy = ErrorPolicy.PROPAGATE

    # Default target of JsonLinesFileSink
    events_path: Path = Path(".eventrelay/events.jsonl")

    @property
    def is_production(self) -> bool:
        """Whether running in production mode."""
        return self.environment == "production"


# Module-level singleton — import as `from eventrelay.config import settings`
settings = RelaySettings()
