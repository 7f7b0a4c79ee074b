REGISTRY = """
TOPIC: registry
===============

Tool registration, documentation, and invocation by name.

GLOBAL REGISTRY:
    from toolcall import get_registry, set_registry, reset_registry

    registry = get_registry()  # Get global singleton
    reset_registry()           # Clear and reset

REGISTERING TOOLS:
    registry.register(add)                       # Tool built by @tool
    registry.register(add, name="plus")          # Under another name
    registry.register_function(math.hypot, signature=Signature.of(float, float))
    registry.register_functions({"add": add_fn}, metadata={"add": add_meta})

    Names are unique: registering an existing name raises NameConflictError
    and leaves the registry unchanged. Remove first to replace.

LOOKUP & REMOVAL:
    registry.get("add")            # ToolNotFoundError if missing
    registry.remove("add")         # ToolNotFoundError if missing
    registry.list_names()          # set of names
    "add" in registry

DOCUMENTATION:
    print(registry.describe())

    === Combined Function Prompts ===

    --- Function: add ---
    Function: add
    Description: Returns the sum of two numbers.
    ...

INVOCATION:
    outcome = registry.invoke("add", [3, 4])
    outcome.ok, outcome.kind, outcome.results, outcome.failure

    Unknown names return an outcome with a NOT_FOUND failure.

RELATED TOPICS:
    toolcall help tool         Creating tools
    toolcall help invoke       Argument checks and outcome kinds
"""
