"""Tests for ToolRegistry: registration, lookup, documentation and invocation by name."""

from __future__ import annotations

import math
import threading

import pytest

from toolcall.foundation.core import FunctionMetadata, ParamDoc, Signature, Tool, tool
from toolcall.foundation.errors import ErrorCode, InvalidSignatureError, NameConflictError, ToolNotFoundError
from toolcall.foundation.registry import ToolRegistry, get_registry, reset_registry, set_registry


@tool
def add(a: float, b: float) -> float:
    return a + b


@tool
def negate(x: float) -> float:
    return -x


def _subtract(a: float, b: float) -> float:
    return a - b


# ─────────────────────────────────────────────────────────────────────────────
# Registration
# ─────────────────────────────────────────────────────────────────────────────


class TestRegistration:
    def test_register_and_get(self) -> None:
        registry = ToolRegistry()
        registry.register(add)
        assert registry.get("add") is add
        assert "add" in registry
        assert len(registry) == 1

    def test_duplicate_name_leaves_registry_unchanged(self) -> None:
        registry = ToolRegistry([add])
        impostor = Tool.from_function(_subtract, name="add")

        with pytest.raises(NameConflictError) as exc_info:
            registry.register(impostor)

        assert exc_info.value.error.code is ErrorCode.NAME_CONFLICT
        assert registry.list_names() == {"add"}
        assert registry.get("add") is add
        assert registry.invoke("add", [1, 2]).results == (3.0,)

    def test_register_under_alias(self) -> None:
        registry = ToolRegistry()
        registry.register(add, name="plus")
        assert registry.list_names() == {"plus"}
        assert registry.invoke("plus", [2, 2]).results == (4.0,)

    def test_alias_renames_stored_tool(self) -> None:
        registry = ToolRegistry()
        registry.register(add, name="plus")
        stored = registry.get("plus")
        assert stored.name == "plus"
        assert stored.doc.startswith("Function: plus")
        assert add.name == "add"
        assert registry.invoke("plus", [1, "x"]).failure.tool_name == "plus"

    def test_register_function_introspects(self) -> None:
        registry = ToolRegistry()
        t = registry.register_function(_subtract, name="subtract")
        assert t.signature.min_args == 2
        assert registry.invoke("subtract", [5, 3]).results == (2.0,)

    def test_register_function_with_explicit_signature(self) -> None:
        registry = ToolRegistry()
        registry.register_function(math.hypot, name="hypot", signature=Signature.of(float, float))
        assert registry.invoke("hypot", [3, 4]).results == (5.0,)

    def test_register_functions_with_metadata_mapping(self) -> None:
        meta = {"subtract": FunctionMetadata(function_name="subtract", description="Returns a - b.",
                                             params=[ParamDoc(name="a"), ParamDoc(name="b")])}
        registry = ToolRegistry()
        registry.register_functions({"subtract": _subtract, "negate": negate.handle}, meta)

        assert registry.list_names() == {"subtract", "negate"}
        assert "Description: Returns a - b." in registry.get("subtract").doc
        assert registry.get("negate").doc == "Function: negate(x: float)\n"

    def test_register_functions_with_metadata_callable(self) -> None:
        registry = ToolRegistry()
        registry.register_functions(
            {"subtract": _subtract},
            lambda name: FunctionMetadata(function_name=name, description=f"The {name} tool."),
        )
        assert "Description: The subtract tool." in registry.get("subtract").doc

    def test_non_callable_rejected(self) -> None:
        registry = ToolRegistry()
        with pytest.raises(InvalidSignatureError):
            registry.register_functions({"broken": 42})  # type: ignore[dict-item]
        assert len(registry) == 0

    def test_async_function_rejected(self) -> None:
        async def fetch(x: int) -> int:
            return x

        with pytest.raises(InvalidSignatureError):
            Tool.from_function(fetch)


# ─────────────────────────────────────────────────────────────────────────────
# Lookup & removal
# ─────────────────────────────────────────────────────────────────────────────


class TestLookup:
    def test_get_missing_raises(self) -> None:
        with pytest.raises(ToolNotFoundError) as exc_info:
            ToolRegistry().get("nope")
        assert exc_info.value.error.code is ErrorCode.NOT_FOUND

    def test_remove(self) -> None:
        registry = ToolRegistry([add, negate])
        registry.remove("add")
        assert registry.list_names() == {"negate"}
        with pytest.raises(ToolNotFoundError):
            registry.remove("add")

    def test_remove_then_reregister(self) -> None:
        registry = ToolRegistry([add])
        registry.remove("add")
        registry.register(Tool.from_function(_subtract, name="add"))
        assert registry.invoke("add", [5, 3]).results == (2.0,)

    def test_invoke_unknown_returns_not_found_outcome(self) -> None:
        outcome = ToolRegistry().invoke("Multiply", [2, 3])
        assert outcome.failure is not None
        assert outcome.failure.code is ErrorCode.NOT_FOUND
        assert outcome.failure.message == "function 'Multiply' not found in store"
        assert outcome.results == ()

    def test_iteration_is_a_snapshot(self) -> None:
        registry = ToolRegistry([add, negate])
        for t in registry:
            registry.remove(t.name)
        assert len(registry) == 0


# ─────────────────────────────────────────────────────────────────────────────
# Documentation
# ─────────────────────────────────────────────────────────────────────────────


def test_describe_is_sorted_and_framed() -> None:
    registry = ToolRegistry([negate, add])
    text = registry.describe()
    assert text.startswith("=== Combined Function Prompts ===\n\n--- Function: add ---\n")
    assert text.index("--- Function: add ---") < text.index("--- Function: negate ---")
    assert text.endswith("Function: negate(x: float)\n\n\n")


def test_describe_empty_registry() -> None:
    assert ToolRegistry().describe() == "=== Combined Function Prompts ===\n\n"


# ─────────────────────────────────────────────────────────────────────────────
# Concurrency
# ─────────────────────────────────────────────────────────────────────────────


def test_concurrent_registration_of_same_name_admits_exactly_one() -> None:
    registry = ToolRegistry()
    candidates = [Tool.from_function(_subtract, name="shared") for _ in range(16)]
    winners: list[Tool] = []
    barrier = threading.Barrier(len(candidates))

    def attempt(t: Tool) -> None:
        barrier.wait()
        try:
            registry.register(t)
            winners.append(t)
        except NameConflictError:
            pass

    threads = [threading.Thread(target=attempt, args=(t,)) for t in candidates]
    for th in threads:
        th.start()
    for th in threads:
        th.join()

    assert len(winners) == 1
    assert registry.get("shared") is winners[0]


# ─────────────────────────────────────────────────────────────────────────────
# Global registry
# ─────────────────────────────────────────────────────────────────────────────


def test_global_registry_lifecycle() -> None:
    first = get_registry()
    assert get_registry() is first
    first.register(add)

    custom = ToolRegistry()
    set_registry(custom)
    assert get_registry() is custom

    reset_registry()
    assert get_registry() is not custom
    assert len(get_registry()) == 0
