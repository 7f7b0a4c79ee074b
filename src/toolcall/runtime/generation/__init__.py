"""Cancelable streaming generation against a model backend."""

from .backend import ModelBackend
from .engine import GenerationEngine, GenerationSession, GenerationStream
from .ollama import OllamaBackend

__all__ = [
    "ModelBackend",
    "GenerationEngine",
    "GenerationSession",
    "GenerationStream",
    "OllamaBackend",
]
