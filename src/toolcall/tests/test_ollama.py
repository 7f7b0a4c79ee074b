"""Tests for OllamaBackend against a mocked HTTP transport."""

from __future__ import annotations

from typing import Any, Callable

import httpx
import orjson
import pytest

from toolcall.foundation.errors import GenerationBackendError
from toolcall.runtime.generation import GenerationEngine, OllamaBackend


def _ndjson(*objects: dict[str, Any]) -> bytes:
    return b"\n".join(orjson.dumps(o) for o in objects) + b"\n"


def _backend(handler: Callable[[httpx.Request], httpx.Response], **kwargs: Any) -> OllamaBackend:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return OllamaBackend("test-model", base_url="http://ollama.test/", client=client, **kwargs)


@pytest.mark.asyncio
async def test_streams_response_fragments_and_sends_payload() -> None:
    seen: list[dict[str, Any]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url == "http://ollama.test/api/generate"
        seen.append(orjson.loads(request.content))
        return httpx.Response(200, content=_ndjson(
            {"response": '{"function": ', "done": False},
            {"response": '"add"}', "done": False},
            {"response": "", "done": True},
        ))

    backend = _backend(handler, temperature=0.0, format="json")
    fragments = [f async for f in backend.stream("add things")]

    assert fragments == ['{"function": ', '"add"}']
    assert seen == [{
        "model": "test-model",
        "prompt": "add things",
        "stream": True,
        "options": {"temperature": 0.0},
        "format": "json",
    }]


@pytest.mark.asyncio
async def test_format_omitted_when_empty() -> None:
    seen: list[dict[str, Any]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(orjson.loads(request.content))
        return httpx.Response(200, content=_ndjson({"response": "hi", "done": True}))

    assert [f async for f in _backend(handler, format="").stream("p")] == ["hi"]
    assert "format" not in seen[0]


@pytest.mark.asyncio
async def test_stops_at_done_and_skips_blank_lines() -> None:
    body = b'{"response": "a", "done": false}\n\n{"response": "b", "done": true}\n{"response": "ignored"}\n'
    backend = _backend(lambda _: httpx.Response(200, content=body))
    assert [f async for f in backend.stream("p")] == ["a", "b"]


@pytest.mark.asyncio
async def test_http_error_status() -> None:
    backend = _backend(lambda _: httpx.Response(404, content=b'{"error":"model \'test-model\' not found"}'))
    with pytest.raises(GenerationBackendError) as exc_info:
        [f async for f in backend.stream("p")]
    assert "HTTP 404" in exc_info.value.error.message


@pytest.mark.asyncio
async def test_error_line_in_stream() -> None:
    backend = _backend(lambda _: httpx.Response(200, content=_ndjson({"response": "x"}, {"error": "out of memory"})))
    received: list[str] = []
    with pytest.raises(GenerationBackendError) as exc_info:
        async for f in backend.stream("p"):
            received.append(f)
    assert received == ["x"]
    assert exc_info.value.error.message == "out of memory"


@pytest.mark.asyncio
async def test_malformed_line() -> None:
    backend = _backend(lambda _: httpx.Response(200, content=b"not json\n"))
    with pytest.raises(GenerationBackendError, match="malformed stream line"):
        [f async for f in backend.stream("p")]


@pytest.mark.asyncio
async def test_connection_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(GenerationBackendError, match="network error"):
        [f async for f in _backend(handler).stream("p")]


@pytest.mark.asyncio
async def test_through_engine() -> None:
    backend = _backend(lambda _: httpx.Response(200, content=_ndjson(
        {"response": "Hel", "done": False}, {"response": "lo", "done": True},
    )))
    engine = GenerationEngine(backend)
    assert await engine.generate("greet").collect() == "Hello"


def test_defaults_come_from_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    from toolcall.foundation.config import clear_settings_cache

    monkeypatch.setenv("TOOLCALL_GENERATION_MODEL", "qwen2.5")
    monkeypatch.setenv("TOOLCALL_GENERATION_BASE_URL", "http://gpu-box:11434")
    clear_settings_cache()

    backend = OllamaBackend()
    assert backend.model == "qwen2.5"
    assert backend.url == "http://gpu-box:11434/api/generate"
    assert backend.temperature == 0.0
    assert backend.format == "json"


def test_explicit_base_url_overrides_settings() -> None:
    backend = OllamaBackend(base_url="http://10.0.0.5:11434/")
    assert backend.url == "http://10.0.0.5:11434/api/generate"
    assert backend.base_url == "http://10.0.0.5:11434"
