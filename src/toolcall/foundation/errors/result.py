"""Explicit success/failure values.

Tools report domain failures by returning ``Err(...)`` instead of raising, and
``InvocationOutcome.to_result()`` hands callers the same shape.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Result(Generic[T, E]):
    """Either an Ok value or an Err value; build with ``Ok``/``Err``.

    Example:
        >>> Err("division by zero is not allowed").unwrap_err()
        'division by zero is not allowed'
    """

    _value: T | E
    _ok: bool

    def is_ok(self) -> bool:
        return self._ok

    def is_err(self) -> bool:
        return not self._ok

    def unwrap(self) -> T:
        if not self._ok:
            raise RuntimeError(f"unwrap() called on {self!r}")
        return self._value  # type: ignore[return-value]

    def unwrap_err(self) -> E:
        if self._ok:
            raise RuntimeError(f"unwrap_err() called on {self!r}")
        return self._value  # type: ignore[return-value]

    def __bool__(self) -> bool:
        return self._ok

    def __repr__(self) -> str:
        return f"{'Ok' if self._ok else 'Err'}({self._value!r})"


def Ok(value: T) -> Result[T, E]:  # noqa: N802
    return Result(value, True)


def Err(error: E) -> Result[T, E]:  # noqa: N802
    return Result(error, False)
