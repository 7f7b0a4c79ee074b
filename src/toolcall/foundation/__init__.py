"""Foundation - Core building blocks for toolcall.

Contains: tool definitions, invocation engine, error handling, registry, testing, config.
"""

from __future__ import annotations

__all__ = [
    # Core
    "Tool", "Signature", "Parameter", "tool", "type_name",
    "FunctionMetadata", "ParamDoc", "ReturnDoc", "ConstraintDoc",
    "invoke", "reconcile_arguments", "coerce", "InvocationOutcome", "OutcomeKind",
    # Errors
    "ErrorCode", "ToolError", "ToolException", "NameConflictError", "ToolNotFoundError",
    "SessionNotFoundError", "InvalidSignatureError", "GenerationBackendError", "OrchestrationError",
    "Result", "Ok", "Err",
    # Registry
    "ToolRegistry", "get_registry", "set_registry", "reset_registry",
    # Testing
    "MockBackend",
    # Config
    "ToolcallSettings", "LoggingSettings", "GenerationSettings", "get_settings", "clear_settings_cache",
]


def __getattr__(name: str):
    """Lazy imports to avoid circular dependencies."""
    if name in ("Tool", "Signature", "Parameter", "tool", "type_name",
                "FunctionMetadata", "ParamDoc", "ReturnDoc", "ConstraintDoc",
                "invoke", "reconcile_arguments", "coerce", "InvocationOutcome", "OutcomeKind"):
        from . import core
        return getattr(core, name)

    if name in ("ErrorCode", "ToolError", "ToolException", "NameConflictError", "ToolNotFoundError",
                "SessionNotFoundError", "InvalidSignatureError", "GenerationBackendError", "OrchestrationError",
                "Result", "Ok", "Err"):
        from . import errors
        return getattr(errors, name)

    if name in ("ToolRegistry", "get_registry", "set_registry", "reset_registry"):
        from . import registry
        return getattr(registry, name)

    if name == "MockBackend":
        from . import testing
        return getattr(testing, name)

    if name in ("ToolcallSettings", "LoggingSettings", "GenerationSettings", "get_settings", "clear_settings_cache"):
        from . import config
        return getattr(config, name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
