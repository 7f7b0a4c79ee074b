TESTING = """
TOPIC: testing
==============

Testing utilities for generation and agents.

MOCK BACKEND:
    from toolcall.foundation.testing import MockBackend

    backend = MockBackend(fragments=['{"function": "add", ', '"arguments": [1, 2]}'])
    engine = GenerationEngine(backend, buffer_size=4)

    backend.prompts          # prompts received
    backend.call_count

SIMULATING FAILURES:
    MockBackend(fragments=["a", "b"], raises=RuntimeError("boom"), fail_after=1)
    MockBackend(fragments=["tick"], endless=True, delay=0.01)   # until stopped
    MockBackend(responder=lambda prompt: [prompt.upper()])

    MockBackend.replying('{"function": "add", "arguments": [1, 2]}', chunk=5)

LOG CAPTURE:
    from toolcall.runtime.observability import CaptureRenderer, configure_logging

    capture = CaptureRenderer()
    configure_logging(renderer=capture, level="DEBUG")
    capture.events("error")

RUNNING TESTS:
    pip install -e ".[test]"
    pytest

RELATED TOPICS:
    toolcall help generation   The engine under test
"""
