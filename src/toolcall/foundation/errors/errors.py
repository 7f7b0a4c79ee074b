"""Standardized error handling for tool registration, invocation and generation.

Provides error codes, a structured error model that carries enough context to
render an actionable message, and the exceptions raised at API boundaries.
"""

from __future__ import annotations

import traceback
from enum import StrEnum
from typing import Annotated, Any, Self

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


class ErrorCode(StrEnum):
    """Machine-readable failure classification."""
    NAME_CONFLICT = "NAME_CONFLICT"
    NOT_FOUND = "NOT_FOUND"
    ARGUMENT_COUNT_MISMATCH = "ARGUMENT_COUNT_MISMATCH"
    ARGUMENT_TYPE_MISMATCH = "ARGUMENT_TYPE_MISMATCH"
    INTERNAL_FAILURE = "INTERNAL_FAILURE"
    FUNCTION_REPORTED = "FUNCTION_REPORTED"
    GENERATION_BACKEND = "GENERATION_BACKEND"
    INVALID_SIGNATURE = "INVALID_SIGNATURE"
    PARSE_ERROR = "PARSE_ERROR"
    TEMPLATE_ERROR = "TEMPLATE_ERROR"


# Codes detected before the callable ever runs
_REJECTION_CODES: frozenset[ErrorCode] = frozenset({
    ErrorCode.NOT_FOUND,
    ErrorCode.ARGUMENT_COUNT_MISMATCH,
    ErrorCode.ARGUMENT_TYPE_MISMATCH,
})


class ToolError(BaseModel):
    """Structured error for a failed tool operation.

    Attributes:
        tool_name: Name of the tool (or generation key) involved
        message: Human-readable error message
        code: Machine-readable error code
        recoverable: Whether a corrected request might succeed
        position: 1-based argument position for argument errors
        element: 1-based element index inside an unpacked variadic sequence
        expected: Expected type name for type mismatches
        actual: Actual type name for type mismatches
        arguments: Argument values at the time of an internal failure
        details: Optional verbose info (e.g., traceback)
    """

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        arbitrary_types_allowed=True,
        json_schema_extra={
            "title": "Tool Error",
            "examples": [{
                "tool_name": "divide",
                "message": "argument 2: expected float, got str",
                "code": "ARGUMENT_TYPE_MISMATCH",
                "position": 2,
                "expected": "float",
                "actual": "str",
            }],
        },
    )

    tool_name: Annotated[str, Field(min_length=1)]
    message: Annotated[str, Field(min_length=1)]
    code: ErrorCode = ErrorCode.INTERNAL_FAILURE
    recoverable: bool = True
    position: int | None = Field(default=None, ge=1)
    element: int | None = Field(default=None, ge=1)
    expected: str | None = None
    actual: str | None = None
    arguments: tuple[Any, ...] | None = Field(default=None, repr=False)
    details: str | None = Field(default=None, repr=False)

    @field_validator("message", mode="before")
    @classmethod
    def _ensure_message(cls, v: str | BaseException) -> str:
        """Accept exception objects and extract the message."""
        if isinstance(v, BaseException):
            return str(v) or type(v).__name__
        return v

    @computed_field
    @property
    def is_rejection(self) -> bool:
        """Whether the request was refused before the callable ran."""
        return self.code in _REJECTION_CODES

    @classmethod
    def create(
        cls,
        tool_name: str,
        message: str,
        code: ErrorCode,
        *,
        recoverable: bool = True,
        **context: Any,
    ) -> Self:
        """Factory method for construction."""
        return cls(tool_name=tool_name, message=message, code=code, recoverable=recoverable, **context)

    @classmethod
    def from_exception(
        cls,
        tool_name: str,
        exc: BaseException,
        context: str = "",
        *,
        code: ErrorCode = ErrorCode.INTERNAL_FAILURE,
        arguments: tuple[Any, ...] | None = None,
        include_trace: bool = True,
    ) -> Self:
        """Create from a caught exception, keeping its traceback text."""
        desc = f"{type(exc).__name__}: {exc}" if str(exc) else type(exc).__name__
        return cls(
            tool_name=tool_name,
            message=f"{context}: {desc}" if context else desc,
            code=code,
            recoverable=False,
            arguments=arguments,
            details="".join(traceback.format_exception(exc)) if include_trace else None,
        )

    def render(self) -> str:
        """Format error for LLM or user consumption."""
        parts = [f"**Tool Error ({self.tool_name}) [{self.code}]:** {self.message}"]
        if self.arguments is not None:
            parts.append(f"\nArguments: {list(self.arguments)!r}")
        if self.recoverable:
            parts.append("\n_This error may be recoverable - check the arguments and try again._")
        if self.details and _show_details():
            parts.append(f"\n\nDetails:\n```\n{self.details}\n```")
        return "".join(parts)

    __str__ = render


def _show_details() -> bool:
    from toolcall.foundation.config import get_settings
    return get_settings().debug


class ToolException(Exception):
    """Exception wrapping a ToolError for raising.

    Raised by registry and engine APIs. A callable may also raise it on
    purpose to report a domain failure; the invocation engine then treats it
    like an ``Err`` return rather than a fault.
    """

    code: ErrorCode = ErrorCode.INTERNAL_FAILURE

    def __init__(self, error: ToolError) -> None:
        self.error = error
        super().__init__(error.message)

    @classmethod
    def create(cls, tool_name: str, message: str, code: ErrorCode | None = None, *, recoverable: bool = True) -> Self:
        return cls(ToolError(tool_name=tool_name, message=message, code=code or cls.code, recoverable=recoverable))


class NameConflictError(ToolException):
    """A tool with the same name is already registered."""
    code = ErrorCode.NAME_CONFLICT


class ToolNotFoundError(ToolException):
    """No tool is registered under the requested name."""
    code = ErrorCode.NOT_FOUND


class SessionNotFoundError(ToolException):
    """No live generation session exists for the requested key."""
    code = ErrorCode.NOT_FOUND


class InvalidSignatureError(ToolException):
    """A callable's signature cannot be described as a tool signature."""
    code = ErrorCode.INVALID_SIGNATURE


class GenerationBackendError(ToolException):
    """The model backend failed for a reason other than cancellation."""
    code = ErrorCode.GENERATION_BACKEND


class OrchestrationError(ToolException):
    """An agent stage failed before a tool could be invoked.

    ``stage`` names where it happened (``template``, ``generation``,
    ``decode``) and ``__cause__`` holds the original exception.
    """

    def __init__(self, error: ToolError, stage: str) -> None:
        super().__init__(error)
        self.stage = stage

    @classmethod
    def at(cls, stage: str, exc: BaseException, code: ErrorCode) -> OrchestrationError:
        err = cls(ToolError(tool_name="agent", message=f"{stage} failed: {exc}", code=code, recoverable=True), stage)
        err.__cause__ = exc
        return err
