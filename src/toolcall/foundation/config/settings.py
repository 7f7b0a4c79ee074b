"""Environment-based configuration using pydantic-settings.

Example:
    >>> from toolcall.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.generation.buffer_size
    100
    >>> settings.logging.level
    'INFO'

    # Or with environment variables:
    # TOOLCALL_GENERATION_MODEL=llama3.2
    # TOOLCALL_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, PositiveFloat, PositiveInt, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="TOOLCALL_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "none"] = "console"

    @field_validator("level", mode="before")
    @classmethod
    def _upper(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class GenerationSettings(BaseSettings):
    """Model backend and streaming engine configuration."""

    model_config = SettingsConfigDict(
        env_prefix="TOOLCALL_GENERATION_",
        extra="ignore",
    )

    model: str = Field(default="llama3.2", description="Model name passed to the backend")
    base_url: str = Field(default="http://localhost:11434", description="Ollama server URL")
    buffer_size: PositiveInt = Field(default=100, description="Fragments buffered per session before the producer blocks")
    temperature: Annotated[float, Field(ge=0.0, le=2.0)] = 0.0
    format: Literal["json", ""] = Field(default="json", description="Response format constraint sent to the backend")
    request_timeout: PositiveFloat = Field(default=300.0, description="HTTP timeout for backend requests")

    @computed_field
    @property
    def generate_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/api/generate"


class ToolcallSettings(BaseSettings):
    """Root settings for toolcall.

    Loads configuration from environment variables with TOOLCALL_ prefix.
    Supports nested configuration and .env files.

    Example environment variables:
        TOOLCALL_DEBUG=true
        TOOLCALL_LOG_FORMAT=json
        TOOLCALL_GENERATION_BUFFER_SIZE=32
        TOOLCALL_GENERATION__MODEL=qwen2.5
    """

    model_config = SettingsConfigDict(
        env_prefix="TOOLCALL_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    debug: bool = Field(default=False, description="Include captured tracebacks in ToolError.render() output")
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    generation: GenerationSettings = Field(default_factory=GenerationSettings)


@lru_cache(maxsize=1)
def get_settings() -> ToolcallSettings:
    """Get the global settings instance (cached)."""
    return ToolcallSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()
