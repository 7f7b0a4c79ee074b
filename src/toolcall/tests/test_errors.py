"""Tests for structured errors and the exceptions that carry them."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from toolcall.foundation.errors import (
    ErrorCode,
    NameConflictError,
    OrchestrationError,
    ToolError,
    ToolException,
)


def test_create_and_render() -> None:
    err = ToolError.create("divide", "argument 2: expected float, got str", ErrorCode.ARGUMENT_TYPE_MISMATCH,
                           position=2, expected="float", actual="str")
    assert err.is_rejection
    text = err.render()
    assert text.startswith("**Tool Error (divide) [ARGUMENT_TYPE_MISMATCH]:** argument 2: expected float, got str")
    assert "may be recoverable" in text


def test_from_exception_keeps_trace_and_arguments() -> None:
    try:
        1 / 0
    except ZeroDivisionError as e:
        err = ToolError.from_exception("divide", e, "function raised", arguments=(1, 0))

    assert err.code is ErrorCode.INTERNAL_FAILURE
    assert err.message == "function raised: ZeroDivisionError: division by zero"
    assert not err.recoverable
    assert not err.is_rejection
    assert err.details is not None and "ZeroDivisionError" in err.details
    assert "Arguments: [1, 0]" in err.render()


def test_error_is_immutable_and_validated() -> None:
    err = ToolError.create("t", "m", ErrorCode.NOT_FOUND)
    with pytest.raises(ValidationError):
        err.message = "changed"  # type: ignore[misc]
    with pytest.raises(ValidationError):
        ToolError.create("", "m", ErrorCode.NOT_FOUND)
    with pytest.raises(ValidationError):
        ToolError.create("t", "m", ErrorCode.ARGUMENT_TYPE_MISMATCH, position=0)


def test_exception_subclasses_carry_their_code() -> None:
    exc = NameConflictError.create("add", "already registered")
    assert isinstance(exc, ToolException)
    assert exc.error.code is ErrorCode.NAME_CONFLICT
    assert str(exc) == "already registered"


def test_orchestration_error_chains_cause() -> None:
    cause = KeyError("unknown")
    exc = OrchestrationError.at("template", cause, ErrorCode.TEMPLATE_ERROR)
    assert exc.stage == "template"
    assert exc.__cause__ is cause
    assert exc.error.message.startswith("template failed:")


def test_render_shows_traceback_only_in_debug(monkeypatch: pytest.MonkeyPatch) -> None:
    from toolcall.foundation.config import clear_settings_cache

    err = ToolError.from_exception("divide", ZeroDivisionError("division by zero"), "function raised")
    assert err.details is not None
    assert "Details:" not in err.render()

    monkeypatch.setenv("TOOLCALL_DEBUG", "true")
    clear_settings_cache()
    assert "Details:" in err.render()
