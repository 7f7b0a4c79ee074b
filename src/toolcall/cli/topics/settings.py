SETTINGS = """
TOPIC: settings
===============

Centralized configuration via environment variables and .env files.

GETTING SETTINGS:
    from toolcall import get_settings
    from toolcall.foundation.config import clear_settings_cache

    settings = get_settings()
    print(settings.generation.model)
    print(settings.logging.level)

    clear_settings_cache()  # Force reload

SETTINGS CLASSES:
    ToolcallSettings     Root settings container (debug: tracebacks in ToolError.render())
    LoggingSettings      level, format (console | json | none)
    GenerationSettings   model, base_url, buffer_size, temperature, format, request_timeout

ENVIRONMENT VARIABLES:
    TOOLCALL_DEBUG=true
    TOOLCALL_LOG_LEVEL=DEBUG
    TOOLCALL_LOG_FORMAT=json
    TOOLCALL_GENERATION_MODEL=llama3.2
    TOOLCALL_GENERATION_BASE_URL=http://localhost:11434
    TOOLCALL_GENERATION_BUFFER_SIZE=100

    Values in a .env file in the working directory are read too.

RELATED TOPICS:
    toolcall help logging      Log output formats
"""
