OVERVIEW = """
TOPIC: overview
===============

Toolcall lets a language model call plain Python functions.

PURPOSE:
    Register functions with documentation, let a model pick one and supply
    arguments as JSON, then validate and run the call without letting any
    failure crash the host.

PIECES:
    ToolRegistry        Named tools, prompt documentation, thread-safe
    invoke()            Arity and type checks, lossless coercion, fault isolation
    GenerationEngine    Streams model fragments; stop(key) cancels mid-stream
    Agent               Prompt -> model -> FunctionCall -> InvocationOutcome

QUICK START:
    from toolcall import tool, ToolRegistry

    @tool
    def add(a: float, b: float) -> float:
        return a + b

    registry = ToolRegistry([add])
    registry.invoke("add", [3, 4]).results     # (7.0,)

COMMANDS:
    toolcall tools                     Print the combined tool documentation
    toolcall invoke divide '[10, 2]'   Run a calculator tool directly
    toolcall ask "divide 4 and 3"      Ask the configured model

RELATED TOPICS:
    toolcall help tool         Creating tools
    toolcall help registry     Tool registration and documentation
    toolcall help agent        Running the agent
"""
