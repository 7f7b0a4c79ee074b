"""Invocation engine: validate, coerce and safely apply untyped arguments.

Arguments arrive as plain decoded values (typically JSON from a model reply).
The engine matches them against a tool's ``Signature``, converts where the
conversion is lossless, and calls the function inside a failure boundary so
nothing the function raises can escape to the caller.

Pipeline:
    1. Arity check (exact, or ``>= n - 1`` for a variadic tail)
    2. Per-argument reconciliation via strict pydantic validation, with a
       lossless widening fallback (int -> float, integral float -> int, ...)
    3. Guarded call
    4. Partition of the return value into results and a reported failure

Example:
    >>> outcome = invoke(divide_tool, [10.0, 0.0])
    >>> outcome.kind
    <OutcomeKind.DOMAIN_ERROR: 'domain_error'>
    >>> outcome.failure.message
    'division by zero is not allowed'
"""

from __future__ import annotations

import types
from dataclasses import dataclass
from enum import StrEnum
from functools import lru_cache
from typing import TYPE_CHECKING, Any, Union, get_args, get_origin

from pydantic import ConfigDict, PydanticUserError, TypeAdapter, ValidationError

from toolcall.foundation.errors import Err, ErrorCode, Ok, Result, ToolError, ToolException
from toolcall.runtime.observability import get_logger

from .tool import type_name

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .tool import Parameter, Signature, Tool

log = get_logger("toolcall.invoke")


class OutcomeKind(StrEnum):
    """Which branch of the outcome sum type an invocation landed in."""
    OK = "ok"                      # Values returned, no failure
    DOMAIN_ERROR = "domain_error"  # Function reported a failure through its return value
    FAULT = "fault"                # Function raised
    REJECTED = "rejected"          # Lookup or arguments refused before the call


@dataclass(frozen=True, slots=True)
class InvocationOutcome:
    """Result of one invocation attempt.

    Exactly one of ``results`` (possibly empty) or ``failure`` is meaningful:
    a failure always comes with empty results.
    """

    tool_name: str
    results: tuple[Any, ...] = ()
    failure: ToolError | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def kind(self) -> OutcomeKind:
        if self.failure is None:
            return OutcomeKind.OK
        if self.failure.code is ErrorCode.FUNCTION_REPORTED:
            return OutcomeKind.DOMAIN_ERROR
        if self.failure.code is ErrorCode.INTERNAL_FAILURE:
            return OutcomeKind.FAULT
        return OutcomeKind.REJECTED

    @property
    def value(self) -> Any:
        """Single result convenience: the value, the tuple, or None when empty."""
        if len(self.results) == 1:
            return self.results[0]
        return self.results or None

    def to_result(self) -> Result[tuple[Any, ...], ToolError]:
        return Ok(self.results) if self.failure is None else Err(self.failure)

    def render(self) -> str:
        """Text suitable for interaction history or terminal output."""
        if self.failure is not None:
            return f"Error: {self.failure.message}"
        return f"Result: {list(self.results)!r}"

    @classmethod
    def success(cls, tool_name: str, results: tuple[Any, ...]) -> InvocationOutcome:
        return cls(tool_name=tool_name, results=results)

    @classmethod
    def failed(cls, error: ToolError) -> InvocationOutcome:
        return cls(tool_name=error.tool_name, failure=error)


# ─────────────────────────────────────────────────────────────────────────────
# Type reconciliation
# ─────────────────────────────────────────────────────────────────────────────

_STRICT = ConfigDict(strict=True, arbitrary_types_allowed=True)
_MISSING = object()
_ANY = (Any, object)
_NUMERIC = (int, float, complex)


def _build_adapter(annotation: Any) -> TypeAdapter[Any]:
    try:
        return TypeAdapter(annotation, config=_STRICT)
    except PydanticUserError:
        # Models, dataclasses and TypedDicts carry their own config
        return TypeAdapter(annotation)


_cached_adapter = lru_cache(maxsize=256)(_build_adapter)


def _adapter(annotation: Any) -> TypeAdapter[Any]:
    try:
        return _cached_adapter(annotation)
    except TypeError:  # unhashable annotation
        return _build_adapter(annotation)


def _widen(value: Any, annotation: Any) -> Any:
    """Lossless conversion toward ``annotation``, or ``_MISSING``."""
    if isinstance(value, bool):
        return _MISSING
    origin = get_origin(annotation)
    if annotation is int:
        return int(value) if isinstance(value, float) and value.is_integer() else _MISSING
    if annotation in (float, complex):
        if not isinstance(value, (int, float)) or (annotation is float and isinstance(value, float)):
            return _MISSING
        try:
            return annotation(value)
        except OverflowError:
            return _MISSING
    if origin in (list, tuple) and isinstance(value, (list, tuple)):
        args = get_args(annotation)
        if origin is tuple and args and args[-1] is not Ellipsis:
            if len(args) != len(value):
                return _MISSING
            items = [coerce(v, a) for v, a in zip(value, args)]
        else:
            elem = args[0] if args else Any
            items = [coerce(v, elem) for v in value]
        if any(r.is_err() for r in items):
            return _MISSING
        return origin(r.unwrap() for r in items)
    if annotation is list and isinstance(value, tuple):
        return list(value)
    if origin in (Union, types.UnionType):
        for member in get_args(annotation):
            if (w := _widen(value, member)) is not _MISSING:
                return w
    return _MISSING


def coerce(value: Any, annotation: Any) -> Result[Any, str]:
    """Reconcile one value with an expected type.

    Returns ``Ok(converted)`` when the value already satisfies the type or a
    lossless conversion exists, else ``Err(actual_type_name)``.
    """
    if annotation in _ANY:
        return Ok(value)
    if annotation in _NUMERIC:
        if isinstance(value, bool):
            return Err("bool")
        if isinstance(value, int) and annotation is not int:
            try:
                return Ok(annotation(value))
            except OverflowError:  # int too large for a double
                return Err(type_name(type(value)))
    try:
        adapter = _adapter(annotation)
    except PydanticUserError:
        # No schema for this annotation: fall back to a plain instance check
        if isinstance(annotation, type) and isinstance(value, annotation):
            return Ok(value)
        return Err(type_name(type(value)))
    try:
        return Ok(adapter.validate_python(value, strict=True))
    except ValidationError:
        pass
    if (widened := _widen(value, annotation)) is not _MISSING:
        try:
            return Ok(adapter.validate_python(widened, strict=True))
        except ValidationError:
            pass
    return Err(type_name(type(value)))


def _type_mismatch(tool_name: str, param: Parameter, position: int, actual: str, element: int | None = None) -> ToolError:
    where = f"argument {position}" + (f" (element {element})" if element else "")
    return ToolError.create(
        tool_name, f"{where}: expected {param.type_name}, got {actual}", ErrorCode.ARGUMENT_TYPE_MISMATCH,
        position=position, element=element, expected=param.type_name, actual=actual,
    )


def _unpacks(param: Parameter, tail: Sequence[Any]) -> bool:
    """A lone sequence in a variadic tail is spread, unless the element type is itself a sequence."""
    return (
        len(tail) == 1
        and isinstance(tail[0], (list, tuple))
        and get_origin(param.annotation) not in (list, tuple)
        and param.annotation not in (list, tuple)
    )


def reconcile_arguments(tool_name: str, signature: Signature, args: Sequence[Any]) -> Result[list[Any], ToolError]:
    """Arity check plus per-argument reconciliation. No side effects."""
    params, n = signature.params, len(signature.params)
    if signature.is_variadic:
        if len(args) < n - 1:
            return Err(ToolError.create(
                tool_name, f"argument count mismatch: expected at least {n - 1} arguments, got {len(args)}",
                ErrorCode.ARGUMENT_COUNT_MISMATCH, expected=str(n - 1), actual=str(len(args)),
            ))
    elif len(args) != n:
        return Err(ToolError.create(
            tool_name, f"argument count mismatch: expected {n} arguments, got {len(args)}",
            ErrorCode.ARGUMENT_COUNT_MISMATCH, expected=str(n), actual=str(len(args)),
        ))

    fixed = params[:-1] if signature.is_variadic else params
    converted: list[Any] = []
    for position, (param, value) in enumerate(zip(fixed, args), start=1):
        r = coerce(value, param.annotation)
        if r.is_err():
            return Err(_type_mismatch(tool_name, param, position, r.unwrap_err()))
        converted.append(r.unwrap())

    if not signature.is_variadic:
        return Ok(converted)

    rest, tail_start = params[-1], n
    tail = list(args[n - 1:])
    if _unpacks(rest, tail):
        for element, value in enumerate(tail[0], start=1):
            r = coerce(value, rest.annotation)
            if r.is_err():
                return Err(_type_mismatch(tool_name, rest, tail_start, r.unwrap_err(), element))
            converted.append(r.unwrap())
        return Ok(converted)

    for position, value in enumerate(tail, start=tail_start):
        r = coerce(value, rest.annotation)
        if r.is_err():
            return Err(_type_mismatch(tool_name, rest, position, r.unwrap_err()))
        converted.append(r.unwrap())
    return Ok(converted)


# ─────────────────────────────────────────────────────────────────────────────
# Call & result partition
# ─────────────────────────────────────────────────────────────────────────────


def _as_results(value: Any, keep_none: bool) -> tuple[Any, ...]:
    if isinstance(value, tuple):
        return value
    if value is None and not keep_none:
        return ()
    return (value,)


def _reported(tool_name: str, error: Any) -> ToolError:
    if isinstance(error, ToolError):
        return error.model_copy(update={"code": ErrorCode.FUNCTION_REPORTED})
    message = str(error).strip()
    if not message:
        message = type(error).__name__ if isinstance(error, BaseException) else "function reported a failure"
    return ToolError.create(tool_name, message, ErrorCode.FUNCTION_REPORTED)


def _partition(tool: Tool, value: Any) -> InvocationOutcome:
    """Split a raw return value into results and a reported failure."""
    if isinstance(value, Result):
        if value.is_err():
            return InvocationOutcome.failed(_reported(tool.name, value.unwrap_err()))
        return InvocationOutcome.success(tool.name, _as_results(value.unwrap(), keep_none=False))

    if tool.signature.error_tail:
        if not isinstance(value, tuple) or not value:
            return InvocationOutcome.failed(ToolError.create(
                tool.name, f"declared an error-terminated tuple but returned {type_name(type(value))}",
                ErrorCode.INTERNAL_FAILURE, recoverable=False,
            ))
        *values, error = value
        if error is not None:
            return InvocationOutcome.failed(_reported(tool.name, error))
        return InvocationOutcome.success(tool.name, tuple(values))

    return InvocationOutcome.success(tool.name, _as_results(value, keep_none=tool.signature.returns_value))


def invoke(tool: Tool, arguments: Sequence[Any]) -> InvocationOutcome:
    """Validate arguments and call the tool. Never raises for tool failures.

    Args:
        tool: Registered tool to run
        arguments: Positional values in declared order

    Returns:
        InvocationOutcome with results, or a failure classified as rejected,
        domain error (``FUNCTION_REPORTED``) or fault (``INTERNAL_FAILURE``).
    """
    args = list(arguments)
    reconciled = reconcile_arguments(tool.name, tool.signature, args)
    if reconciled.is_err():
        error = reconciled.unwrap_err()
        log.warning("arguments rejected", tool=tool.name, code=str(error.code), reason=error.message)
        return InvocationOutcome.failed(error)

    call_args = reconciled.unwrap()
    try:
        value = tool.handle(*call_args)
    except ToolException as e:
        log.info("function reported failure", tool=tool.name, reason=e.error.message)
        return InvocationOutcome.failed(_reported(tool.name, e.error))
    except (Exception, SystemExit) as e:
        log.error("function raised", tool=tool.name, error=f"{type(e).__name__}: {e}", arguments=call_args)
        return InvocationOutcome.failed(
            ToolError.from_exception(tool.name, e, "function raised", arguments=tuple(call_args))
        )

    outcome = _partition(tool, value)
    log.debug("tool invoked", tool=tool.name, kind=str(outcome.kind))
    return outcome
