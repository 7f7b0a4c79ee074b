AGENT = """
TOPIC: agent
============

Prompt -> model -> function call -> outcome.

USAGE:
    from toolcall import Agent, GenerationEngine, OllamaBackend
    from toolcall.tools import calculator_registry

    agent = Agent(calculator_registry(), GenerationEngine(OllamaBackend()))
    outcome = await agent.execute("divide 4 and 3")
    outcome = agent.execute_sync("divide 4 and 3")   # from sync code

PROMPT:
    string.Template with $tools, $history and $request. The history
    section appears only after the first exchange.

MODEL REPLY:
    {"function": "divide", "arguments": [4, 3]}

    Decoded strictly: unknown keys or wrong shapes are decode failures.

FAILURES:
    OrchestrationError.stage    template | generation | decode
    Lookup, argument and function failures come back in the outcome.

STREAMING:
    Agent(..., on_fragment=lambda f: print(f, end=""))

RELATED TOPICS:
    toolcall help generation   Streaming and cancellation
    toolcall help invoke       Outcome kinds
"""
