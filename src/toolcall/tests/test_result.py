"""Tests for the Result type returned by tools and outcomes."""

from __future__ import annotations

import pytest

from toolcall.foundation.errors import Err, Ok, Result


def test_ok_and_err_discriminate() -> None:
    assert Ok(0).is_ok() and not Ok(0).is_err()
    assert Err("x").is_err() and not Err("x").is_ok()
    assert Ok(0)
    assert not Err("x")


def test_unwrap_on_wrong_branch_raises() -> None:
    assert Ok(1).unwrap() == 1
    assert Err("bad").unwrap_err() == "bad"
    with pytest.raises(RuntimeError, match="Err\\('bad'\\)"):
        Err("bad").unwrap()
    with pytest.raises(RuntimeError):
        Ok(1).unwrap_err()


def test_equality_and_repr() -> None:
    assert Ok(1) == Ok(1)
    assert Ok(1) != Err(1)
    assert repr(Ok(1)) == "Ok(1)"
    assert repr(Err("x")) == "Err('x')"
    assert isinstance(Ok(None), Result)


def test_frozen() -> None:
    with pytest.raises(AttributeError):
        Ok(1)._value = 2  # type: ignore[misc]
