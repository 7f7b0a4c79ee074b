"""Configuration management using pydantic-settings."""

from .settings import (
    GenerationSettings,
    LoggingSettings,
    ToolcallSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "GenerationSettings",
    "LoggingSettings",
    "ToolcallSettings",
    "clear_settings_cache",
    "get_settings",
]
