GENERATION = """
TOPIC: generation
=================

Cancelable streaming generation.

BASIC USAGE:
    from toolcall import GenerationEngine, OllamaBackend

    engine = GenerationEngine(OllamaBackend("llama3.2"))
    stream = engine.generate("Say hi", key="req-1")
    async for fragment in stream:
        print(fragment, end="")

CANCELLATION:
    engine.stop("req-1")         # from any task or thread
    engine.stop("req-1")         # again: SessionNotFoundError

    The producer stops at its next await; the stream ends after any
    fragments already buffered and stream.cancelled is True.

SCOPED SESSION:
    async with engine.session(prompt) as stream:
        text = await stream.collect()
    # still-running producers are cancelled on exit

BACKPRESSURE:
    Each session buffers at most buffer_size fragments
    (TOOLCALL_GENERATION_BUFFER_SIZE, default 100). A slow consumer blocks
    the producer; nothing is dropped.

ERRORS:
    A backend failure ends the stream and raises GenerationBackendError
    once, at the end of iteration. It is logged and never retried.

INTROSPECTION:
    engine.active_keys(), engine.is_active(key), await engine.shutdown()

CUSTOM BACKENDS:
    Any object with `stream(prompt) -> AsyncIterator[str]`.

RELATED TOPICS:
    toolcall help agent        Using the engine from the agent
    toolcall help testing      MockBackend
"""
