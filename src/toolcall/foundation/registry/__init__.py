"""Tool registry: name-keyed, thread-safe store of invocable tools."""

from .registry import MetadataSource, ToolRegistry, get_registry, reset_registry, set_registry

__all__ = ["ToolRegistry", "MetadataSource", "get_registry", "set_registry", "reset_registry"]
