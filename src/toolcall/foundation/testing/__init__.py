"""Testing utilities for toolcall: scripted model backends."""

from .mock import MockBackend

__all__ = ["MockBackend"]
