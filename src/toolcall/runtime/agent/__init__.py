"""Function-calling agent over the registry and the generation engine."""

from .agent import Agent, FragmentCallback, FunctionCall
from .memory import Interaction, Memory
from .prompt import DEFAULT_TEMPLATE, render_prompt

__all__ = [
    "Agent",
    "FragmentCallback",
    "FunctionCall",
    "Interaction",
    "Memory",
    "DEFAULT_TEMPLATE",
    "render_prompt",
]
