INVOKE = """
TOPIC: invoke
=============

Validating and applying model-supplied arguments.

PIPELINE:
    1. Arity        exact count, or at least n-1 for a variadic tail
    2. Types        each argument checked against its parameter type
    3. Call         the function runs inside a failure boundary
    4. Partition    return value split into results and a reported failure

COERCION (lossless only):
    int -> float            7 for a float parameter becomes 7.0
    integral float -> int   5.0 for an int parameter becomes 5
    list <-> tuple          element-wise
    bool is never a number; strings are never parsed

VARIADIC TAIL:
    For (int, *float):
        [2, 1.5, 2.5]      -> 2, 1.5, 2.5
        [2, [1.5, 2.5]]    -> a lone sequence is spread into the tail
        [2]                -> empty tail
        []                 -> ARGUMENT_COUNT_MISMATCH

OUTCOME KINDS:
    OK             results (possibly empty)
    DOMAIN_ERROR   FUNCTION_REPORTED: Err(...) or a non-None error slot
    FAULT          INTERNAL_FAILURE: the function raised
    REJECTED       NOT_FOUND, ARGUMENT_COUNT_MISMATCH, ARGUMENT_TYPE_MISMATCH

    A failure always comes with empty results.

CLI:
    toolcall invoke divide '[10, 2]'     Result: [5.0]
    toolcall invoke divide '[10, 0]'     Error: division by zero is not allowed
    toolcall invoke divide '[10, "2"]'   Error: argument 2: expected float, got str

RELATED TOPICS:
    toolcall help tool         Reporting failures from a tool
"""
