"""Unified error handling for toolcall.

- ErrorCode: Standard error codes for registry, invocation and generation failures
- ToolError/ToolException: Structured errors and the exceptions that carry them
- Result/Ok/Err: Explicit success/failure values returned by tools and outcomes
"""

from .errors import (
    ErrorCode,
    GenerationBackendError,
    InvalidSignatureError,
    NameConflictError,
    OrchestrationError,
    SessionNotFoundError,
    ToolError,
    ToolException,
    ToolNotFoundError,
)
from .result import Err, Ok, Result

__all__ = [
    # Core errors
    "ErrorCode", "ToolError", "ToolException",
    "NameConflictError", "ToolNotFoundError", "SessionNotFoundError", "InvalidSignatureError",
    "GenerationBackendError", "OrchestrationError",
    # Result
    "Result", "Ok", "Err",
]
