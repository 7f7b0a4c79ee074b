"""Central registry for tool discovery, documentation and invocation.

The registry provides:
- Tool registration and lookup by unique name (never overwrites)
- Bulk population from a function map plus a metadata source
- Combined tool documentation for LLM prompts
- Invocation by name through the invocation engine

All operations are thread-safe: the backing dict is only touched under a
lock, and the lock is never held while a tool runs.
"""

from __future__ import annotations

import threading
from dataclasses import replace
from collections.abc import Callable, Iterator, Mapping, Sequence
from typing import Any

from toolcall.foundation.core import FunctionMetadata, InvocationOutcome, Signature, Tool, invoke
from toolcall.foundation.errors import ErrorCode, NameConflictError, ToolError, ToolNotFoundError
from toolcall.runtime.observability import get_logger

log = get_logger("toolcall.registry")

MetadataSource = Mapping[str, FunctionMetadata] | Callable[[str], FunctionMetadata | None]


class ToolRegistry:
    """Central registry for all available tools.

    Example:
        >>> registry = ToolRegistry()
        >>> registry.register(divide)                       # a Tool built by @tool
        >>> registry.register_function(math.hypot, signature=Signature.of(float, float))
        >>> registry.invoke("divide", [10.0, 2.0]).results
        (5.0,)
        >>> print(registry.describe())                      # prompt documentation
    """

    __slots__ = ("_tools", "_lock")

    def __init__(self, tools: Sequence[Tool] = ()) -> None:
        self._tools: dict[str, Tool] = {}
        self._lock = threading.RLock()
        self.register_all(*tools)

    def register(self, tool: Tool, name: str | None = None) -> None:
        """Register a tool under ``name`` (defaults to ``tool.name``).

        Raises:
            NameConflictError: A tool with that name already exists; the
                registry is left unchanged.
        """
        key = name or tool.name
        if key != tool.name:
            tool = replace(tool, name=key, doc=tool.doc.replace(f"Function: {tool.name}", f"Function: {key}", 1))
        with self._lock:
            if not (conflict := key in self._tools):
                self._tools[key] = tool
        if conflict:
            log.error("tool already exists", tool=key)
            raise NameConflictError.create(key, f"Tool '{key}' already registered. Use remove() first.", recoverable=False)
        log.info("tool added", tool=key)

    def register_function(
        self,
        fn: Callable[..., Any],
        *,
        name: str | None = None,
        metadata: FunctionMetadata | None = None,
        signature: Signature | None = None,
    ) -> Tool:
        """Wrap a plain callable as a Tool and register it."""
        t = Tool.from_function(fn, name=name, metadata=metadata, signature=signature)
        self.register(t)
        return t

    def register_all(self, *tools: Tool) -> None:
        for t in tools:
            self.register(t)

    def register_functions(self, functions: Mapping[str, Callable[..., Any]], metadata: MetadataSource | None = None) -> None:
        """Bulk-populate from ``{name: function}`` and a metadata lookup (mapping or callable).

        Functions without metadata still register, documented by name and signature.
        """
        lookup: Callable[[str], FunctionMetadata | None]
        if metadata is None:
            lookup = lambda _: None  # noqa: E731
        elif isinstance(metadata, Mapping):
            lookup = metadata.get
        else:
            lookup = metadata
        for fname, fn in functions.items():
            self.register_function(fn, name=fname, metadata=lookup(fname))

    def get(self, name: str) -> Tool:
        """Get tool by name.

        Raises:
            ToolNotFoundError: No tool registered under ``name``.
        """
        with self._lock:
            found = self._tools.get(name)
        if found is None:
            raise ToolNotFoundError.create(name, f"Tool '{name}' not found in registry", recoverable=False)
        return found

    def remove(self, name: str) -> None:
        """Remove a tool by name. Raises ToolNotFoundError if absent."""
        with self._lock:
            removed = self._tools.pop(name, None)
        if removed is None:
            log.error("tool not found", tool=name)
            raise ToolNotFoundError.create(name, f"Tool '{name}' not found in registry", recoverable=False)
        log.info("tool removed", tool=name)

    def list_names(self) -> set[str]:
        with self._lock:
            return set(self._tools)

    def snapshot(self) -> dict[str, Tool]:
        """Point-in-time copy of the name -> tool mapping."""
        with self._lock:
            return dict(self._tools)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._tools

    def __len__(self) -> int:
        with self._lock:
            return len(self._tools)

    def __iter__(self) -> Iterator[Tool]:
        return iter(self.snapshot().values())

    def clear(self) -> None:
        with self._lock:
            self._tools.clear()

    # ─────────────────────────────────────────────────────────────────
    # Invocation
    # ─────────────────────────────────────────────────────────────────

    def invoke(self, name: str, arguments: Sequence[Any]) -> InvocationOutcome:
        """Look up ``name`` and run it through the invocation engine.

        An unknown name yields an outcome with a ``NOT_FOUND`` failure rather
        than raising, so agent code handles every failure the same way.
        """
        with self._lock:
            found = self._tools.get(name)
        if found is None:
            log.warning("tool not found", tool=name)
            return InvocationOutcome.failed(
                ToolError.create(name, f"function '{name}' not found in store", ErrorCode.NOT_FOUND)
            )
        log.debug("tool selected", tool=name)
        return invoke(found, arguments)

    # ─────────────────────────────────────────────────────────────────
    # Formatting
    # ─────────────────────────────────────────────────────────────────

    def describe(self) -> str:
        """Combined documentation of every tool for the model prompt, in name order."""
        tools = self.snapshot()
        parts = ["=== Combined Function Prompts ===\n\n"]
        for name in sorted(tools):
            parts.append(f"--- Function: {name} ---\n{tools[name].doc}\n\n")
        return "".join(parts)


# ─────────────────────────────────────────────────────────────────────────────
# Global Registry
# ─────────────────────────────────────────────────────────────────────────────

_registry: ToolRegistry | None = None
_registry_lock = threading.Lock()


def get_registry() -> ToolRegistry:
    """Get the global tool registry instance."""
    global _registry
    with _registry_lock:
        if _registry is None:
            _registry = ToolRegistry()
        return _registry


def set_registry(registry: ToolRegistry) -> None:
    """Replace the global registry."""
    global _registry
    with _registry_lock:
        _registry = registry


def reset_registry() -> None:
    """Reset the global registry (useful for testing)."""
    global _registry
    with _registry_lock:
        if _registry is not None:
            _registry.clear()
        _registry = None
