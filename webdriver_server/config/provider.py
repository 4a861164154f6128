"""Configuration provider following Black Box Design principles."""
import os
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_IDLE_TIMEOUT_SECONDS = 120.0

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


class ServerConfig(BaseModel):
    """Server configuration.  Read once at startup and never changed."""

    model_config = ConfigDict(frozen=True)

    port: int = Field(..., description="Port to listen on", ge=1, le=65535)
    host: str = Field(default="0.0.0.0", description="Address to bind")
    log_path: Optional[str] = Field(
        default=None, description="Write server log to this file instead of stderr"
    )
    log_level: str = Field(default="INFO", description="Logging level")
    idle_timeout_seconds: float = Field(
        default=DEFAULT_IDLE_TIMEOUT_SECONDS, description="A timeout for idle sessions", gt=0
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Normalize the level name and reject unknown ones."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Choose from {', '.join(LOG_LEVELS)}.")
        return level


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def get_server_config(self, **overrides: Any) -> ServerConfig:
        """
        Get server configuration from environment variables.

        Args:
            **overrides: Values that win over the environment, e.g. from
                command-line flags.  None values are ignored.

        Returns:
            Validated ServerConfig

        Raises:
            ValueError: If no port is configured
            pydantic.ValidationError: If a value is out of range
        """
        values: Dict[str, Any] = {
            "port": os.getenv("WEBDRIVER_PORT"),
            "host": os.getenv("WEBDRIVER_HOST"),
            "log_path": os.getenv("WEBDRIVER_LOG_PATH"),
            "log_level": os.getenv("WEBDRIVER_LOG_LEVEL"),
            "idle_timeout_seconds": os.getenv("WEBDRIVER_IDLE_TIMEOUT_SECONDS"),
        }
        values.update({key: value for key, value in overrides.items() if value is not None})

        if values["port"] is None:
            raise ValueError(
                "Missing required configuration: port. "
                "Pass --port or set WEBDRIVER_PORT."
            )

        return ServerConfig(**{key: value for key, value in values.items() if value is not None})


def load_config(**overrides: Any) -> ServerConfig:
    """Load configuration from the environment, with overrides applied."""
    return EnvConfigProvider().get_server_config(**overrides)
