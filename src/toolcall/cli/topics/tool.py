TOOL = """
TOPIC: tool
===========

Turning functions into tools.

DECORATOR:
    from toolcall import tool, FunctionMetadata, ParamDoc

    @tool
    def add(a: float, b: float) -> float:
        return a + b

    @tool(metadata=FunctionMetadata(
        function_name="scale",
        description="Multiplies every value by a factor.",
        params=[ParamDoc(name="factor", desc="Multiplier"), ParamDoc(name="values", desc="Values")],
    ))
    def scale(factor: int, *values: float) -> list[float]:
        return [factor * v for v in values]

SIGNATURES:
    Positional parameters are read from annotations. *args makes the last
    parameter variadic; its annotation is the element type. Required
    keyword-only parameters and async functions are rejected.

    Explicit signature for callables without annotations:
        from toolcall import Signature, Tool
        Tool.from_function(math.hypot, name="hypot", signature=Signature.of(float, float))

REPORTING FAILURES:
    Return Err(...) from a Result-annotated function:
        def divide(a: float, b: float) -> Result[float, str]:
            return Err("division by zero is not allowed") if b == 0 else Ok(a / b)

    Or return an error-terminated tuple:
        def parse(s: str) -> tuple[int, ValueError | None]: ...

    Or raise ToolException.create(name, message). Any other exception is
    a fault (INTERNAL_FAILURE), never propagated.

RELATED TOPICS:
    toolcall help invoke       How arguments are checked
    toolcall help registry     Registering tools
"""
