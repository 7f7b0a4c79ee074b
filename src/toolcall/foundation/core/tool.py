"""Tool definitions: a callable, its positional signature and its documentation.

A ``Signature`` is the typed adapter the invocation engine works from. It is
derived from the function's annotations by default, or supplied explicitly
when a callable has none (builtins, C extensions, lambdas).

Example:
    >>> @tool(metadata=FunctionMetadata(function_name="scale", description="Scales values."))
    ... def scale(factor: int, *values: float) -> list[float]:
    ...     return [factor * v for v in values]
    ...
    >>> scale.signature.is_variadic
    True
    >>> scale.invoke([2, 1.5, 2.5]).results
    ([3.0, 5.0],)
"""

from __future__ import annotations

import inspect
import types
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Union, get_args, get_origin, get_type_hints, overload

from toolcall.foundation.errors import InvalidSignatureError

from .metadata import FunctionMetadata

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .invoke import InvocationOutcome

_EMPTY = inspect.Parameter.empty


def type_name(annotation: Any) -> str:
    """Readable name for an annotation (``float``, ``list[int]``, ``int | None``)."""
    if annotation is Any or annotation is _EMPTY:
        return "Any"
    if isinstance(annotation, type) and not get_args(annotation):
        return annotation.__name__
    return repr(annotation).replace("typing.", "")


def _is_exception_type(tp: Any) -> bool:
    return isinstance(tp, type) and issubclass(tp, BaseException)


def _is_error_slot(tp: Any) -> bool:
    """``ValueError``, ``Exception | None`` or ``Optional[ValueError]``."""
    if _is_exception_type(tp):
        return True
    if get_origin(tp) in (Union, types.UnionType):
        members = [a for a in get_args(tp) if a is not type(None)]
        return bool(members) and all(_is_exception_type(a) for a in members)
    return False


def _has_error_tail(ret: Any) -> bool:
    if get_origin(ret) is not tuple:
        return False
    args = get_args(ret)
    return bool(args) and args[-1] is not Ellipsis and _is_error_slot(args[-1])


@dataclass(frozen=True, slots=True)
class Parameter:
    """One declared positional parameter.

    ``annotation`` is the expected type; for a variadic parameter it is the
    element type of the tail.
    """

    annotation: Any = Any
    variadic: bool = False
    name: str = ""

    @property
    def type_name(self) -> str:
        return type_name(self.annotation)

    def __str__(self) -> str:
        prefix = "*" if self.variadic else ""
        return f"{prefix}{self.name or '_'}: {self.type_name}"


@dataclass(frozen=True, slots=True)
class Signature:
    """Ordered positional parameters plus return-shape flags.

    Attributes:
        params: Declared parameters; only the last may be variadic
        error_tail: Return value is a tuple whose last slot is an error (or None)
        returns_value: Return annotation declares a value (a ``None`` result is kept)
    """

    params: tuple[Parameter, ...] = ()
    error_tail: bool = False
    returns_value: bool = False

    def __post_init__(self) -> None:
        if any(p.variadic for p in self.params[:-1]):
            raise InvalidSignatureError.create("<signature>", "only the last parameter may be variadic")

    @property
    def is_variadic(self) -> bool:
        return bool(self.params) and self.params[-1].variadic

    @property
    def min_args(self) -> int:
        return len(self.params) - 1 if self.is_variadic else len(self.params)

    @classmethod
    def of(cls, *annotations: Any, variadic: bool = False, error_tail: bool = False, returns_value: bool = True) -> Signature:
        """Build a signature from bare types; ``variadic`` marks the last one.

        Example:
            >>> Signature.of(int, float, variadic=True)   # (int, *float)
        """
        params = tuple(
            Parameter(annotation=a, variadic=variadic and i == len(annotations) - 1, name=f"arg{i + 1}")
            for i, a in enumerate(annotations)
        )
        return cls(params=params, error_tail=error_tail, returns_value=returns_value)

    @classmethod
    def from_callable(cls, fn: Callable[..., Any]) -> Signature:
        """Introspect a function's positional parameters and return annotation.

        Keyword-only parameters with defaults and ``**kwargs`` are ignored;
        required keyword-only parameters cannot be supplied positionally and
        are rejected.
        """
        name = getattr(fn, "__name__", repr(fn))
        if inspect.iscoroutinefunction(fn) or inspect.isasyncgenfunction(fn):
            raise InvalidSignatureError.create(name, "async callables cannot be invoked synchronously")
        try:
            sig = inspect.signature(fn)
        except (TypeError, ValueError) as e:
            raise InvalidSignatureError.create(name, f"cannot inspect signature: {e}") from e
        try:
            hints = get_type_hints(fn)
        except (NameError, TypeError):
            hints = {k: v for k, v in getattr(fn, "__annotations__", {}).items() if not isinstance(v, str)}

        params: list[Parameter] = []
        for p in sig.parameters.values():
            match p.kind:
                case inspect.Parameter.POSITIONAL_ONLY | inspect.Parameter.POSITIONAL_OR_KEYWORD:
                    params.append(Parameter(annotation=hints.get(p.name, Any), name=p.name))
                case inspect.Parameter.VAR_POSITIONAL:
                    params.append(Parameter(annotation=hints.get(p.name, Any), variadic=True, name=p.name))
                case inspect.Parameter.KEYWORD_ONLY if p.default is _EMPTY:
                    raise InvalidSignatureError.create(name, f"required keyword-only parameter '{p.name}' is not supported")
                case _:
                    continue

        ret = hints.get("return", sig.return_annotation)
        declared = ret is not _EMPTY and ret is not None and ret is not type(None)
        return cls(params=tuple(params), error_tail=_has_error_tail(ret), returns_value=declared)

    def __str__(self) -> str:
        return f"({', '.join(map(str, self.params))})"


@dataclass(frozen=True, slots=True)
class Tool:
    """A registered callable with its signature and documentation.

    Immutable: the registry owns it and the invocation engine only reads it.
    """

    name: str
    handle: Callable[..., Any] = field(repr=False)
    signature: Signature = field(default_factory=Signature)
    metadata: FunctionMetadata | None = field(default=None, repr=False)
    doc: str = field(default="", repr=False)

    @classmethod
    def from_function(
        cls,
        fn: Callable[..., Any],
        *,
        name: str | None = None,
        metadata: FunctionMetadata | None = None,
        signature: Signature | None = None,
        doc: str | None = None,
    ) -> Tool:
        """Wrap a callable. ``signature`` overrides introspection, ``doc`` overrides metadata rendering."""
        if not callable(fn):
            raise InvalidSignatureError.create(name or repr(fn), "entry is not a function")
        name = name or (metadata.function_name if metadata and metadata.function_name else None) or getattr(fn, "__name__", "")
        if not name:
            raise InvalidSignatureError.create(repr(fn), "tool name cannot be empty")
        sig = signature or Signature.from_callable(fn)
        if doc is None:
            doc = metadata.render(name) if metadata else f"Function: {name}{sig}\n"
        return cls(name=name, handle=fn, signature=sig, metadata=metadata, doc=doc)

    def invoke(self, arguments: Sequence[Any]) -> InvocationOutcome:
        """Run through the invocation engine (validation, coercion, fault isolation)."""
        from .invoke import invoke
        return invoke(self, arguments)

    def __call__(self, *args: Any) -> Any:
        """Call the underlying function directly, bypassing the engine."""
        return self.handle(*args)


@overload
def tool(fn: Callable[..., Any], /) -> Tool: ...
@overload
def tool(*, name: str | None = None, metadata: FunctionMetadata | None = None,
         signature: Signature | None = None) -> Callable[[Callable[..., Any]], Tool]: ...


def tool(
    fn: Callable[..., Any] | None = None,
    /,
    *,
    name: str | None = None,
    metadata: FunctionMetadata | None = None,
    signature: Signature | None = None,
) -> Tool | Callable[[Callable[..., Any]], Tool]:
    """Decorator turning a function into a ``Tool``.

    Usable bare (``@tool``) or with options (``@tool(metadata=...)``).
    """
    def decorator(func: Callable[..., Any]) -> Tool:
        return Tool.from_function(func, name=name, metadata=metadata, signature=signature)

    return decorator(fn) if fn is not None else decorator
