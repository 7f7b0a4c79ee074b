"""Built-in tools."""

from .calculator import CALCULATOR_TOOLS, calculator_registry

__all__ = ["CALCULATOR_TOOLS", "calculator_registry"]
