"""Configuration module for gqlservlet."""

from .core import ExecutionSettings, LoggingSettings, ServerSettings
from .settings import Settings, get_settings


__all__ = [
    "ExecutionSettings",
    "LoggingSettings",
    "ServerSettings",
    "Settings",
    "get_settings",
]
