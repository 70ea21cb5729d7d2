import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from gqlservlet.core.errors import ConfigurationError
from gqlservlet.core.logging import get_logger

from .core import ExecutionSettings, LoggingSettings, ServerSettings


__all__ = ["Settings", "ConfigurationError", "get_settings"]


logger = get_logger(__name__)


class Settings(BaseSettings):
    """
    Configuration settings for the gqlservlet HTTP adapter.

    Settings are loaded from environment variables (``GQLSERVLET_`` prefix,
    ``__`` for nested sections), a ``.env`` file and an optional TOML file.
    Values passed explicitly (including TOML values) take precedence over the
    environment.
    """

    model_config = SettingsConfigDict(
        env_prefix="GQLSERVLET_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
    )

    server: ServerSettings = Field(
        default_factory=ServerSettings,
        description="Server configuration settings",
    )

    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Centralized logging configuration",
    )

    execution: ExecutionSettings = Field(
        default_factory=ExecutionSettings,
        description="GraphQL execution settings",
    )

    @property
    def server_url(self) -> str:
        """Get the complete GraphQL endpoint URL."""
        return f"http://{self.server.host}:{self.server.port}{self.server.graphql_path}"

    @classmethod
    def load_toml_config(cls, toml_path: Path) -> dict[str, Any]:
        """Load configuration from a TOML file."""
        try:
            with toml_path.open("rb") as f:
                return tomllib.load(f)
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read TOML config file {toml_path}: {e}"
            ) from e
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(f"Invalid TOML syntax in {toml_path}: {e}") from e

    @classmethod
    def from_config(
        cls, config_path: Path | str | None = None, **overrides: Any
    ) -> "Settings":
        """Build settings from an optional TOML file plus keyword overrides.

        Keyword overrides replace values read from the file.
        """
        config_data: dict[str, Any] = {}
        if config_path is not None:
            path = Path(config_path)
            config_data = cls.load_toml_config(path)
            logger.debug("config_file_loaded", path=str(path))

        config_data.update(overrides)
        try:
            return cls(**config_data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e


@lru_cache
def get_settings() -> Settings:
    """Get the process-wide settings instance."""
    return Settings.from_config()
