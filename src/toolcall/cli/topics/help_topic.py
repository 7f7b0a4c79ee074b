HELP = """
TOPIC: help
===========

How to use the toolcall help system.

USAGE:
    toolcall help              List all available topics
    toolcall help <topic>      Show detailed info about a topic
    toolcall help help         Show this message

CORE TOPICS:
    toolcall help overview     What toolcall is and how the pieces fit
    toolcall help tool         Turning functions into tools
    toolcall help registry     Registering, documenting and looking up tools
    toolcall help invoke       Argument validation, coercion and outcomes

MODEL:
    toolcall help generation   Cancelable streaming generation
    toolcall help agent        Prompt -> model -> function call -> outcome

CONFIGURATION & TESTING:
    toolcall help settings     Environment variables and .env files
    toolcall help logging      Structured logging
    toolcall help testing      MockBackend and test layout

All output is plain text with consistent structure. No menus, no
interactive prompts.
"""
