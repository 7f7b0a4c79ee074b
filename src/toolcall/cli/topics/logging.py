LOGGING = """
TOPIC: logging
==============

Structured logging with bound context.

USAGE:
    from toolcall import get_logger, configure_logging

    configure_logging(format="json", level="DEBUG")
    log = get_logger("my_app", component="worker")
    log.info("tool selected", tool="divide")

    with log_context(request_id="abc"):
        log.info("processing")     # includes request_id

FORMATS:
    console    human readable, colored on a TTY
    json       one JSON object per line (orjson)
    none       discard everything

EVENTS:
    toolcall.registry     tool added / removed / already exists
    toolcall.invoke       arguments rejected, function raised
    toolcall.generation   session lifecycle, backend errors
    toolcall.agent        function selected, undecodable reply

RELATED TOPICS:
    toolcall help settings     TOOLCALL_LOG_* variables
"""
