"""Core configuration settings - server, logging and execution."""

from pydantic import BaseModel, Field, field_validator


# === Server Configuration ===


class ServerSettings(BaseModel):
    """Server-specific configuration settings."""

    host: str = Field(
        default="127.0.0.1",
        description="Server host address",
    )

    port: int = Field(
        default=8000,
        description="Server port number",
        ge=1,
        le=65535,
    )

    graphql_path: str = Field(
        default="/graphql",
        description="Path serving GraphQL over GET and POST",
    )

    management_enabled: bool = Field(
        default=True,
        description="Expose the /management introspection and query routes",
    )

    @field_validator("graphql_path")
    @classmethod
    def validate_graphql_path(cls, v: str) -> str:
        """Ensure the GraphQL path is absolute."""
        if not v.startswith("/"):
            return f"/{v}"
        return v


# === Logging Configuration ===


class LoggingSettings(BaseModel):
    """Centralized logging configuration."""

    level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    json_logs: bool = Field(
        default=False,
        description="Render logs as JSON lines instead of the console renderer",
    )

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        upper_v = v.upper()
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if upper_v not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return upper_v


# === Execution Configuration ===


class ExecutionSettings(BaseModel):
    """Settings used when the servlet builds its configuration from settings."""

    schema_path: str | None = Field(
        default=None,
        description="Path to a GraphQL SDL file served by the CLI",
    )

    async_servlet_mode: bool = Field(
        default=True,
        description=(
            "Dispatch requests on a worker thread; when false, requests run "
            "inline and block the event loop until they finish"
        ),
    )
