"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from toolcall.foundation.config import ToolcallSettings, clear_settings_cache, get_settings


def test_defaults() -> None:
    settings = get_settings()
    assert settings.debug is False
    assert settings.logging.level == "INFO"
    assert settings.logging.format == "console"
    assert settings.generation.buffer_size == 100
    assert settings.generation.model == "llama3.2"
    assert settings.generation.generate_url == "http://localhost:11434/api/generate"


def test_cached_until_cleared(monkeypatch: pytest.MonkeyPatch) -> None:
    first = get_settings()
    assert get_settings() is first

    monkeypatch.setenv("TOOLCALL_GENERATION_BUFFER_SIZE", "7")
    assert get_settings().generation.buffer_size == 100

    clear_settings_cache()
    assert get_settings().generation.buffer_size == 7


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TOOLCALL_DEBUG", "true")
    monkeypatch.setenv("TOOLCALL_LOG_LEVEL", "debug")
    monkeypatch.setenv("TOOLCALL_LOG_FORMAT", "json")
    monkeypatch.setenv("TOOLCALL_GENERATION_BASE_URL", "http://gpu-box:11434/")

    settings = ToolcallSettings()
    assert settings.debug is True
    assert settings.logging.level == "DEBUG"
    assert settings.logging.format == "json"
    assert settings.generation.generate_url == "http://gpu-box:11434/api/generate"


@pytest.mark.parametrize(("var", "value"), [
    ("TOOLCALL_GENERATION_BUFFER_SIZE", "0"),
    ("TOOLCALL_GENERATION_TEMPERATURE", "5"),
    ("TOOLCALL_LOG_FORMAT", "xml"),
])
def test_invalid_values_rejected(monkeypatch: pytest.MonkeyPatch, var: str, value: str) -> None:
    monkeypatch.setenv(var, value)
    with pytest.raises(ValidationError):
        ToolcallSettings()
