"""toolcall command line.

    toolcall tools [--json]            Print the calculator tool documentation
    toolcall invoke NAME ARGS_JSON     Run a calculator tool directly
    toolcall ask "REQUEST" [--quiet]   Let the configured model pick and call a tool
    toolcall help [TOPIC]              Plain-text help topics
"""

from __future__ import annotations

import argparse
import sys
from typing import TYPE_CHECKING

import orjson

from toolcall.foundation.errors import OrchestrationError
from toolcall.runtime.observability import configure_from_settings

from .topics import TOPICS

if TYPE_CHECKING:
    from collections.abc import Sequence


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_from_settings()
    match args.command:
        case "tools":
            return _tools(as_json=args.json)
        case "invoke":
            return _invoke(args.name, args.arguments)
        case "ask":
            return _ask(args.request, model=args.model, quiet=args.quiet)
        case "help" | None:
            return _help(getattr(args, "topic", None))
    return 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="toolcall", description="Let a language model call Python functions.")
    sub = parser.add_subparsers(dest="command")

    tools = sub.add_parser("tools", help="Print the documentation of every calculator tool.")
    tools.add_argument("--json", action="store_true", help="Emit metadata as JSON instead of prompt text.")

    inv = sub.add_parser("invoke", help="Invoke a calculator tool with JSON arguments.")
    inv.add_argument("name", help="Tool name, e.g. divide.")
    inv.add_argument("arguments", nargs="?", default="[]", help="JSON array of positional arguments, e.g. '[10, 2]'.")

    ask = sub.add_parser("ask", help="Ask the configured model to call a calculator tool.")
    ask.add_argument("request", help="Natural-language request, e.g. 'divide 4 and 3'.")
    ask.add_argument("--model", help="Override TOOLCALL_GENERATION_MODEL.")
    ask.add_argument("--quiet", action="store_true", help="Do not echo the model reply while it streams.")

    hlp = sub.add_parser("help", help="Show help topics.")
    hlp.add_argument("topic", nargs="?", default=None, help="Topic name; omit to list topics.")
    return parser


def _tools(*, as_json: bool) -> int:
    from toolcall.tools import calculator_registry

    registry = calculator_registry()
    if not as_json:
        print(registry.describe(), end="")
        return 0
    docs = [t.metadata.model_dump(by_alias=True) for t in sorted(registry, key=lambda t: t.name) if t.metadata]
    print(orjson.dumps(docs, option=orjson.OPT_INDENT_2).decode())
    return 0


def _invoke(name: str, raw: str) -> int:
    from toolcall.tools import calculator_registry

    try:
        arguments = orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        print(f"Error: arguments are not valid JSON: {e}", file=sys.stderr)
        return 2
    if not isinstance(arguments, list):
        print("Error: arguments must be a JSON array", file=sys.stderr)
        return 2
    outcome = calculator_registry().invoke(name, arguments)
    print(outcome.render())
    return 0 if outcome.ok else 1


def _ask(request: str, *, model: str | None, quiet: bool) -> int:
    from toolcall.runtime.agent import Agent
    from toolcall.runtime.generation import GenerationEngine, OllamaBackend
    from toolcall.tools import calculator_registry

    def echo(fragment: str) -> None:
        print(fragment, end="", flush=True)

    agent = Agent(calculator_registry(), GenerationEngine(OllamaBackend(model)), on_fragment=None if quiet else echo)
    try:
        outcome = agent.execute_sync(request)
    except OrchestrationError as e:
        if not quiet:
            print()
        print(f"Error ({e.stage}): {e.error.message}", file=sys.stderr)
        return 2
    if not quiet:
        print()
    print(outcome.render())
    return 0 if outcome.ok else 1


def _help(topic: str | None) -> int:
    if topic is None:
        print(TOPICS["help"].strip())
        print("\nAVAILABLE TOPICS:\n    " + "\n    ".join(sorted(TOPICS)))
        return 0
    text = TOPICS.get(topic.lower())
    if text is None:
        print(f"Unknown topic '{topic}'. Available: {', '.join(sorted(TOPICS))}", file=sys.stderr)
        return 1
    print(text.strip())
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
