"""Tests for signatures and the @tool decorator."""

from __future__ import annotations

from typing import Any

import pytest

from toolcall.foundation.core import FunctionMetadata, Parameter, Signature, Tool, tool
from toolcall.foundation.errors import InvalidSignatureError, Result


def test_signature_from_annotations() -> None:
    def f(a: int, b: list[float], *rest: str) -> tuple[int, ValueError | None]: ...

    sig = Signature.from_callable(f)
    assert [p.annotation for p in sig.params] == [int, list[float], str]
    assert sig.is_variadic
    assert sig.min_args == 2
    assert sig.error_tail
    assert str(sig) == "(a: int, b: list[float], *rest: str)"


def test_unannotated_parameters_accept_anything() -> None:
    sig = Signature.from_callable(lambda x, y: None)
    assert [p.annotation for p in sig.params] == [Any, Any]
    assert not sig.returns_value


def test_result_return_is_not_an_error_tail() -> None:
    def f(x: float) -> Result[float, str]: ...

    sig = Signature.from_callable(f)
    assert not sig.error_tail
    assert sig.returns_value


def test_keyword_only_parameters() -> None:
    def optional(a: int, *, verbose: bool = False) -> int: ...
    def required(a: int, *, mode: str) -> int: ...

    assert len(Signature.from_callable(optional).params) == 1
    with pytest.raises(InvalidSignatureError):
        Signature.from_callable(required)


def test_only_last_parameter_may_be_variadic() -> None:
    with pytest.raises(InvalidSignatureError):
        Signature(params=(Parameter(int, variadic=True), Parameter(float)))


def test_decorator_forms() -> None:
    @tool
    def bare(x: int) -> int:
        return x

    @tool(name="renamed", metadata=FunctionMetadata(description="Doubles x."))
    def configured(x: int) -> int:
        return 2 * x

    assert isinstance(bare, Tool) and bare.name == "bare"
    assert configured.name == "renamed"
    assert configured.doc.startswith("Function: renamed\nDescription: Doubles x.")
    assert configured(4) == 8
    assert configured.invoke([4]).results == (8,)
