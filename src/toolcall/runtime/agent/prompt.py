"""Prompt template for the function-calling agent.

Templates use ``string.Template`` placeholders so the literal JSON braces in
the instructions need no escaping:

    $tools     combined tool documentation from the registry
    $history   interaction history section, empty when there is none
    $request   the user's request
"""

from __future__ import annotations

from string import Template

DEFAULT_TEMPLATE = """\
You are a software engineer. Your task is to help users call mathematical functions.
Below are the available functions and their documentation. Respond to user requests in JSON format using the following template:

{
  "function": "<function_name>",
  "arguments": [<arg1>, <arg2>, ...]
}

Here are the functions and their documentation:
$tools
$history
User Request: $request"""

HISTORY_SECTION = "\n### Interaction History:\n{memory}\n"


def render_prompt(template: str | Template, *, tools: str, request: str, history: str = "") -> str:
    """Fill a template.

    Raises:
        KeyError: Template references an unknown placeholder.
        ValueError: Template contains a malformed placeholder.
    """
    tmpl = template if isinstance(template, Template) else Template(template)
    return tmpl.substitute(
        tools=tools,
        request=request,
        history=HISTORY_SECTION.format(memory=history) if history else "",
    )
