"""
Runtime configuration.

Settings come from ``ROBOT_*`` environment variables, optionally seeded from a
dotenv file, and are validated by pydantic.
"""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal

from dotenv import dotenv_values
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class ConfigurationError(Exception):
    """Raised when settings are missing, malformed or out of range."""

    pass


OutputFormat = Literal["text", "json", "xml", "csv", "quiet"]
CacheBackendName = Literal["none", "memory", "redis"]
CacheStrategy = Literal["state", "result", "both"]

# Environment variable -> settings field
ENV_VARS: dict[str, str] = {
    "ROBOT_TABLE_WIDTH": "table_width",
    "ROBOT_TABLE_HEIGHT": "table_height",
    "ROBOT_OUTPUT_FORMAT": "output_format",
    "ROBOT_LOG_LEVEL": "log_level",
    "ROBOT_DEBUG_MODE": "debug_mode",
    "ROBOT_CACHE_BACKEND": "cache_backend",
    "ROBOT_CACHE_STRATEGY": "cache_strategy",
    "REDIS_URL": "redis_url",
    "ROBOT_CACHE_TTL": "cache_ttl",
    "ROBOT_CACHE_NAMESPACE": "cache_namespace",
    "ROBOT_MAX_COMMANDS": "max_commands",
}


class RobotSettings(BaseModel):
    """Validated runtime settings."""

    model_config = ConfigDict(frozen=True)

    table_width: int = Field(default=5, ge=0)
    table_height: int = Field(default=5, ge=0)
    output_format: OutputFormat = "text"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    debug_mode: bool = False
    cache_backend: CacheBackendName = "none"
    # Result caching replays results without re-running commands
    cache_strategy: CacheStrategy = "state"
    redis_url: str = "redis://localhost:6379/0"
    cache_ttl: int = Field(default=3600, gt=0)
    cache_namespace: str = Field(default="gridbot", pattern=r"^[A-Za-z0-9_.-]+$")
    max_commands: int = Field(default=100_000, gt=0)

    @field_validator("output_format", "cache_backend", "cache_strategy", mode="before")
    @classmethod
    def _lower(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper(cls, value: Any) -> Any:
        return value.strip().upper() if isinstance(value, str) else value

    @property
    def cache_enabled(self) -> bool:
        return self.cache_backend != "none"

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        env_file: str | Path | None = None,
        **overrides: Any,
    ) -> "RobotSettings":
        """
        Build settings from the environment.

        Precedence: explicit overrides, then ``environ``, then the env file.

        Args:
            environ: Variables to read (``os.environ`` if None)
            env_file: Optional dotenv file
            **overrides: Field values that win over everything else (None is ignored)

        Raises:
            ConfigurationError: If the env file is missing or a value is invalid
        """
        variables: dict[str, str] = {}
        if env_file is not None:
            variables.update(load_env_file(env_file))
        variables.update(os.environ if environ is None else environ)

        data: dict[str, Any] = {
            field: variables[name] for name, field in ENV_VARS.items() if name in variables
        }
        data.update({key: value for key, value in overrides.items() if value is not None})

        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e


def load_env_file(path: str | Path) -> dict[str, str]:
    """
    Read a dotenv file (comments, quotes, ``export`` prefixes handled by
    python-dotenv). Keys without a value are dropped.

    Raises:
        ConfigurationError: If the file does not exist
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Env file not found: {path}")

    return {key: value for key, value in dotenv_values(path).items() if value is not None}
