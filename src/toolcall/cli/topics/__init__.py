"""Topic definitions for toolcall CLI help system."""

from .agent import AGENT
from .generation import GENERATION
from .help_topic import HELP
from .invoke import INVOKE
from .logging import LOGGING
from .overview import OVERVIEW
from .registry import REGISTRY
from .settings import SETTINGS
from .testing import TESTING
from .tool import TOOL

TOPICS: dict[str, str] = {
    "help": HELP,
    "overview": OVERVIEW,
    "tool": TOOL,
    "registry": REGISTRY,
    "invoke": INVOKE,
    "generation": GENERATION,
    "agent": AGENT,
    "settings": SETTINGS,
    "logging": LOGGING,
    "testing": TESTING,
}

__all__ = ["TOPICS"]
