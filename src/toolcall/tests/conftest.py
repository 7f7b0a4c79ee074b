"""Shared fixtures: silent logging, fresh settings and registry per test."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from toolcall.foundation.config import clear_settings_cache
from toolcall.foundation.registry import reset_registry
from toolcall.runtime.observability import CaptureRenderer, NoOpRenderer, configure_logging


@pytest.fixture(autouse=True)
def _quiet_logging() -> Iterator[None]:
    configure_logging(renderer=NoOpRenderer())
    yield
    configure_logging(renderer=NoOpRenderer())


@pytest.fixture(autouse=True)
def _fresh_state() -> Iterator[None]:
    clear_settings_cache()
    reset_registry()
    yield
    clear_settings_cache()
    reset_registry()


@pytest.fixture
def captured_logs() -> CaptureRenderer:
    """Record every log entry at DEBUG and above."""
    capture = CaptureRenderer()
    configure_logging(renderer=capture, level="DEBUG")
    return capture
