import logging
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from txsandbox.core.constants import (
    DEFAULT_DATABASE_URL,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_DEPENDENCY_DEPTH,
    DEFAULT_SEQUENCE_START,
    ENV_PREFIX,
)


class Settings(BaseSettings):
    """Sandbox settings"""

    database_url: str = DEFAULT_DATABASE_URL
    echo: bool = False

    sequence_start: int = DEFAULT_SEQUENCE_START
    max_dependency_depth: int = DEFAULT_MAX_DEPENDENCY_DEPTH

    log_level: str = DEFAULT_LOG_LEVEL
    debug: bool = False
    configure_logging: bool = False  # leave logging to the host project unless asked

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX, env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def log_level_number(self) -> int:
        """Numeric logging level for structlog's filtering logger."""
        return logging.getLevelName(self.log_level)


class EnvironmentOptions(BaseModel):
    """
    Options accepted by setup_environment().

    ``client`` is a zero-argument callable returning the long-lived database
    handle (or an awaitable of it). It is checked when setup() runs, not here,
    so a missing client surfaces as a configuration error at setup time.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True, extra="forbid")

    client: Callable[[], Any] | None = None


settings = Settings()
