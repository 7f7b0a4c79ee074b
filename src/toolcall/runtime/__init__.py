"""Runtime - Execution flow, control, and monitoring.

Contains: generation engine, agent, observability, concurrency.
"""

from __future__ import annotations

__all__ = [
    # Generation
    "GenerationEngine", "GenerationSession", "GenerationStream", "ModelBackend", "OllamaBackend",
    # Agent
    "Agent", "FunctionCall", "Memory", "Interaction", "DEFAULT_TEMPLATE", "render_prompt",
    # Observability
    "BoundLogger", "get_logger", "configure_logging", "configure_from_settings", "log_context",
    "ConsoleRenderer", "JsonRenderer", "NoOpRenderer", "CaptureRenderer",
    # Concurrency
    "run_sync",
]


def __getattr__(name: str):
    """Lazy imports to avoid circular dependencies."""
    if name in ("GenerationEngine", "GenerationSession", "GenerationStream", "ModelBackend", "OllamaBackend"):
        from . import generation
        return getattr(generation, name)

    if name in ("Agent", "FunctionCall", "Memory", "Interaction", "DEFAULT_TEMPLATE", "render_prompt"):
        from . import agent
        return getattr(agent, name)

    if name in ("BoundLogger", "get_logger", "configure_logging", "configure_from_settings", "log_context",
                "ConsoleRenderer", "JsonRenderer", "NoOpRenderer", "CaptureRenderer"):
        from . import observability
        return getattr(observability, name)

    if name == "run_sync":
        from .concurrency import run_sync
        return run_sync

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
