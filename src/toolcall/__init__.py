"""Toolcall - Let a language model call your Python functions.

A small framework for exposing plain functions to an LLM: a thread-safe tool
registry with prompt documentation, an invocation engine that validates and
safely applies model-chosen arguments, and a cancelable streaming generation
engine for talking to the model.

Quick Start:
    >>> from toolcall import Err, Ok, Result, ToolRegistry, tool
    >>>
    >>> @tool
    ... def divide(a: float, b: float) -> Result[float, str]:
    ...     return Err("division by zero is not allowed") if b == 0 else Ok(a / b)
    >>>
    >>> registry = ToolRegistry([divide])
    >>> registry.invoke("divide", [10, 2]).results
    (5.0,)
    >>> registry.invoke("divide", [10, "2"]).failure.message
    'argument 2: expected float, got str'

Agent (requires a running Ollama server):
    >>> from toolcall import Agent, GenerationEngine, OllamaBackend
    >>> from toolcall.tools import calculator_registry
    >>>
    >>> agent = Agent(calculator_registry(), GenerationEngine(OllamaBackend("llama3.2")))
    >>> agent.execute_sync("divide 4 and 3").render()
    'Result: [1.3333333333333333]'

Streaming with cancellation:
    >>> engine = GenerationEngine(OllamaBackend())
    >>> stream = engine.generate("Tell me a story", key="story")
    >>> async for fragment in stream:
    ...     if too_long():
    ...         engine.stop("story")
"""

from __future__ import annotations

__version__ = "0.1.0"

# Core
from .foundation.core import (
    ConstraintDoc,
    FunctionMetadata,
    InvocationOutcome,
    OutcomeKind,
    Parameter,
    ParamDoc,
    ReturnDoc,
    Signature,
    Tool,
    invoke,
    tool,
)

# Errors
from .foundation.errors import (
    Err,
    ErrorCode,
    GenerationBackendError,
    InvalidSignatureError,
    NameConflictError,
    Ok,
    OrchestrationError,
    Result,
    SessionNotFoundError,
    ToolError,
    ToolException,
    ToolNotFoundError,
)

# Registry
from .foundation.registry import (
    ToolRegistry,
    get_registry,
    reset_registry,
    set_registry,
)

# Config
from .foundation.config import ToolcallSettings, get_settings

# Generation
from .runtime.generation import (
    GenerationEngine,
    GenerationStream,
    ModelBackend,
    OllamaBackend,
)

# Agent
from .runtime.agent import Agent, FunctionCall, Memory

# Observability
from .runtime.observability import configure_logging, get_logger

__all__ = [
    # Version
    "__version__",
    # Core
    "Tool", "Signature", "Parameter", "tool", "invoke", "InvocationOutcome", "OutcomeKind",
    "FunctionMetadata", "ParamDoc", "ReturnDoc", "ConstraintDoc",
    # Errors
    "ErrorCode", "ToolError", "ToolException", "NameConflictError", "ToolNotFoundError",
    "SessionNotFoundError", "InvalidSignatureError", "GenerationBackendError", "OrchestrationError",
    "Result", "Ok", "Err",
    # Registry
    "ToolRegistry", "get_registry", "set_registry", "reset_registry",
    # Config
    "ToolcallSettings", "get_settings",
    # Generation
    "GenerationEngine", "GenerationStream", "ModelBackend", "OllamaBackend",
    # Agent
    "Agent", "FunctionCall", "Memory",
    # Observability
    "configure_logging", "get_logger",
]
