"""Calculator tools: arithmetic and elementary functions over floats.

Domain errors (division by zero, negative square roots, ...) are returned as
``Err(message)`` so the invocation engine reports them as function-reported
failures rather than faults.

Example:
    >>> registry = calculator_registry()
    >>> registry.invoke("divide", [10, 0]).render()
    'Error: division by zero is not allowed'
"""

from __future__ import annotations

import math

from toolcall.foundation.core import ConstraintDoc, FunctionMetadata, ParamDoc, ReturnDoc, Tool, tool
from toolcall.foundation.errors import Err, Ok, Result
from toolcall.foundation.registry import ToolRegistry


def _meta(
    name: str,
    description: str,
    params: dict[str, str],
    returns: str,
    example: str,
    constraints: dict[str, str] | None = None,
) -> FunctionMetadata:
    return FunctionMetadata(
        function_name=name,
        description=description,
        params=[ParamDoc(name=k, desc=v) for k, v in params.items()],
        returns=[ReturnDoc(type="float", description=returns)],
        examples=[example],
        constraints=[ConstraintDoc(condition=k, desc=v) for k, v in (constraints or {}).items()],
    )


_NONZERO = {"b != 0": "b must not be zero."}
_POSITIVE = {"x > 0": "x must be positive."}


# ─────────────────────────────────────────────────────────────────────────────
# Arithmetic
# ─────────────────────────────────────────────────────────────────────────────

@tool(metadata=_meta("add", "Returns the sum of two numbers.",
                     {"a": "The first number.", "b": "The second number."},
                     "The sum of a and b.", "add(3, 4) # returns 7"))
def add(a: float, b: float) -> float:
    return a + b


@tool(metadata=_meta("subtract", "Returns the difference between two numbers.",
                     {"a": "The first number.", "b": "The second number."},
                     "The difference between a and b.", "subtract(10, 4) # returns 6"))
def subtract(a: float, b: float) -> float:
    return a - b


@tool(metadata=_meta("multiply", "Returns the product of two numbers.",
                     {"a": "The first number.", "b": "The second number."},
                     "The product of a and b.", "multiply(3, 4) # returns 12"))
def multiply(a: float, b: float) -> float:
    return a * b


@tool(metadata=_meta("divide", "Returns the quotient of two numbers.",
                     {"a": "The dividend.", "b": "The divisor."},
                     "The quotient of a divided by b.", "divide(10, 2) # returns 5", _NONZERO))
def divide(a: float, b: float) -> Result[float, str]:
    if b == 0:
        return Err("division by zero is not allowed")
    return Ok(a / b)


@tool(metadata=_meta("modulus", "Returns the remainder of a divided by b.",
                     {"a": "The dividend.", "b": "The divisor."},
                     "The remainder of a divided by b.", "modulus(10, 3) # returns 1", _NONZERO))
def modulus(a: float, b: float) -> Result[float, str]:
    if b == 0:
        return Err("division by zero is not allowed")
    return Ok(math.fmod(a, b))


@tool(metadata=_meta("power", "Returns the result of raising a to the power of b.",
                     {"a": "The base.", "b": "The exponent."},
                     "The result of a raised to the power of b.", "power(2, 3) # returns 8"))
def power(a: float, b: float) -> Result[float, str]:
    try:
        return Ok(math.pow(a, b))
    except OverflowError:
        return Err("result is too large")
    except ValueError:
        return Err("result is not a real number")


@tool(metadata=_meta("square_root", "Calculates the square root of a number.",
                     {"x": "The number to calculate the square root of."},
                     "The square root of the input number.", "square_root(4) # returns 2",
                     {"x >= 0": "x must be non-negative."}))
def square_root(x: float) -> Result[float, str]:
    if x < 0:
        return Err("square root of a negative number is not allowed")
    return Ok(math.sqrt(x))


@tool(metadata=_meta("factorial", "Calculates the factorial of a non-negative integer.",
                     {"n": "The number to calculate the factorial of."},
                     "The factorial of the input number.", "factorial(5) # returns 120",
                     {"n >= 0": "n must be non-negative."}))
def factorial(n: int) -> Result[float, str]:
    if n < 0:
        return Err("factorial of a negative number is not allowed")
    try:
        return Ok(float(math.factorial(n)))
    except OverflowError:
        return Err("result is too large")


@tool(metadata=FunctionMetadata(
    function_name="sum_all",
    description="Returns the sum of any number of values.",
    params=[ParamDoc(name="values", desc="The numbers to add (zero or more).")],
    returns=[ReturnDoc(type="float", description="The sum of all values; 0 when none are given.")],
    examples=["sum_all(1, 2, 3.5) # returns 6.5", "sum_all([1, 2]) # returns 3"],
))
def sum_all(*values: float) -> float:
    return math.fsum(values)


# ─────────────────────────────────────────────────────────────────────────────
# Trigonometry & logarithms
# ─────────────────────────────────────────────────────────────────────────────

@tool(metadata=_meta("sin", "Calculates the sine of a number in radians.",
                     {"x": "The angle in radians."}, "The sine of the input angle.", "sin(pi / 2) # returns 1"))
def sin(x: float) -> float:
    return math.sin(x)


@tool(metadata=_meta("cos", "Calculates the cosine of a number in radians.",
                     {"x": "The angle in radians."}, "The cosine of the input angle.", "cos(0) # returns 1"))
def cos(x: float) -> float:
    return math.cos(x)


@tool(metadata=_meta("tan", "Calculates the tangent of a number in radians.",
                     {"x": "The angle in radians."}, "The tangent of the input angle.", "tan(pi / 4) # returns 1"))
def tan(x: float) -> float:
    return math.tan(x)


@tool(metadata=_meta("log", "Calculates the natural logarithm of a number.",
                     {"x": "The number to calculate the logarithm of."},
                     "The natural logarithm of the input number.", "log(2.71828) # returns 1", _POSITIVE))
def log(x: float) -> Result[float, str]:
    if x <= 0:
        return Err("logarithm of a non-positive number is not allowed")
    return Ok(math.log(x))


@tool(metadata=_meta("log10", "Calculates the base-10 logarithm of a number.",
                     {"x": "The number to calculate the logarithm of."},
                     "The base-10 logarithm of the input number.", "log10(100) # returns 2", _POSITIVE))
def log10(x: float) -> Result[float, str]:
    if x <= 0:
        return Err("logarithm of a non-positive number is not allowed")
    return Ok(math.log10(x))


CALCULATOR_TOOLS: tuple[Tool, ...] = (
    add, subtract, multiply, divide, modulus, power, square_root, factorial, sum_all,
    sin, cos, tan, log, log10,
)


def calculator_registry(registry: ToolRegistry | None = None) -> ToolRegistry:
    """Register every calculator tool into ``registry`` (a new one by default)."""
    registry = registry if registry is not None else ToolRegistry()
    registry.register_all(*CALCULATOR_TOOLS)
    return registry
